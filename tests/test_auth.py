from espaco_bronze.models.usuarios import User


def test_area_admin_exige_login(client):
    for rota in ('/admin', '/admin/agendamentos', '/admin/financeiro', '/admin/promocoes', '/admin/servicos'):
        resposta = client.get(rota)
        assert resposta.status_code == 302
        assert '/admin/login' in resposta.headers['Location']


def test_login_com_credenciais_validas(client, usuario):
    resposta = client.post('/admin/login', data={'email': 'CARLA@espacobronze.com.br', 'password': 'bronze123'})
    assert resposta.status_code == 302
    assert resposta.headers['Location'].endswith('/admin')
    assert client.get('/admin').status_code == 200


def test_login_com_senha_errada(client, usuario):
    resposta = client.post('/admin/login', data={'email': usuario.email, 'password': 'errada'})
    assert resposta.status_code == 200
    assert 'Credenciais inválidas' in resposta.get_data(as_text=True)
    assert client.get('/admin').status_code == 302


def test_logout(admin_client):
    resposta = admin_client.post('/admin/logout')
    assert resposta.status_code == 302
    assert admin_client.get('/admin').status_code == 302


def test_primeiro_usuario_pode_se_cadastrar(client):
    resposta = client.post('/admin/cadastro', data={
        'name': 'Carla', 'email': 'carla@espacobronze.com.br', 'password': 'bronze123',
    })
    assert resposta.status_code == 302
    usuario = User.query.one()
    assert usuario.check_password('bronze123')
    assert usuario.password_hash != 'bronze123'


def test_cadastro_fechado_quando_ja_existe_usuario(client, usuario):
    resposta = client.post('/admin/cadastro', data={
        'name': 'Outra', 'email': 'outra@example.com', 'password': 'segredo123',
    })
    assert resposta.status_code == 302
    assert resposta.headers['Location'].endswith('/admin/login')
    assert User.query.count() == 1


def test_cadastro_aberto_por_configuracao(app, client, usuario):
    app.config['ALLOW_ADMIN_SIGNUP'] = True
    resposta = client.post('/admin/cadastro', data={
        'name': 'Outra', 'email': 'outra@example.com', 'password': 'segredo123',
    })
    assert resposta.status_code == 302
    assert User.query.count() == 2


def test_cadastro_recusa_senha_curta(client):
    resposta = client.post('/admin/cadastro', data={'name': 'Carla', 'email': 'c@example.com', 'password': '123'})
    assert resposta.status_code == 400
    assert User.query.count() == 0


def test_comando_create_admin(app):
    runner = app.test_cli_runner()
    resultado = runner.invoke(args=['create-admin', 'nova@example.com', 'Nova', '--password', 'segredo123'])
    assert resultado.exit_code == 0
    assert User.query.filter_by(email='nova@example.com').one().check_password('segredo123')

    resultado = runner.invoke(args=['create-admin', 'nova@example.com', 'Nova', '--password', 'segredo123'])
    assert resultado.exit_code != 0


def test_login_volta_para_a_pagina_pedida(client, usuario):
    resposta = client.get('/admin/financeiro')
    assert resposta.status_code == 302
    assert 'next=' in resposta.headers['Location']

    html = client.get('/admin/login?next=/admin/financeiro').get_data(as_text=True)
    assert 'value="/admin/financeiro"' in html

    resposta = client.post('/admin/login', data={
        'email': usuario.email, 'password': 'bronze123', 'next': '/admin/financeiro',
    })
    assert resposta.status_code == 302
    assert resposta.headers['Location'].endswith('/admin/financeiro')


def test_login_ignora_destino_externo(client, usuario):
    for destino in ('https://exemplo.com/admin', '//exemplo.com', '/\\exemplo.com', 'admin/financeiro'):
        resposta = client.post('/admin/login', data={
            'email': usuario.email, 'password': 'bronze123', 'next': destino,
        })
        assert resposta.status_code == 302
        assert resposta.headers['Location'].endswith('/admin'), destino
        client.post('/admin/logout')
