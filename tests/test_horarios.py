from datetime import date, time, timedelta

from espaco_bronze import db
from espaco_bronze.horarios import (
    grade_do_dia, data_agendavel, horarios_livres, horarios_disponiveis, tabela_funcionamento,
)
from espaco_bronze.models.agendamentos import Appointment, STATUS_CANCELADO, STATUS_CONCLUIDO

REFERENCIA = date(2026, 10, 19)  # segunda-feira
TERCA = date(2026, 10, 20)
SABADO = date(2026, 10, 24)
DOMINGO = date(2026, 10, 25)


def test_grade_de_dia_util_vai_das_9_as_19():
    grade = grade_do_dia(TERCA)
    assert grade[0] == time(9, 0)
    assert grade[-1] == time(19, 0)
    assert len(grade) == 21
    assert grade == sorted(grade)


def test_grade_de_sabado_termina_as_17_30():
    grade = grade_do_dia(SABADO)
    assert grade[0] == time(9, 0)
    assert grade[-1] == time(17, 30)
    assert len(grade) == 18


def test_domingo_nao_tem_horarios():
    assert grade_do_dia(DOMINGO) == []
    assert horarios_livres(DOMINGO, [], REFERENCIA) == []


def test_datas_que_nao_sao_posteriores_a_hoje_nao_tem_horarios():
    assert not data_agendavel(REFERENCIA, REFERENCIA)
    assert horarios_livres(REFERENCIA, [], REFERENCIA) == []
    assert horarios_livres(REFERENCIA - timedelta(days=1), [], REFERENCIA) == []
    assert data_agendavel(TERCA, REFERENCIA)


def test_horarios_ocupados_sao_removidos():
    ocupados = [time(9, 0), time(12, 30), time(19, 0)]
    livres = horarios_livres(TERCA, ocupados, REFERENCIA)
    assert len(livres) == len(grade_do_dia(TERCA)) - len(ocupados)
    assert not set(ocupados) & set(livres)
    assert livres == sorted(livres)


def _agendar(servico, data, horario, status='pending'):
    agendamento = Appointment(client_name="Cliente", client_phone="21988887777", service_id=servico.id,
                              appointment_date=data, appointment_time=horario, price=servico.price,
                              status=status)
    db.session.add(agendamento)
    return agendamento


def test_horarios_disponiveis_ignora_agendamentos_cancelados(servicos):
    jato = servicos['jato']
    _agendar(jato, TERCA, time(9, 0))
    _agendar(jato, TERCA, time(10, 0), STATUS_CONCLUIDO)
    _agendar(jato, TERCA, time(11, 0), STATUS_CANCELADO)
    _agendar(jato, TERCA + timedelta(days=1), time(14, 0))
    db.session.commit()

    livres = horarios_disponiveis(TERCA, REFERENCIA)

    assert len(livres) == 21 - 2
    assert time(9, 0) not in livres
    assert time(10, 0) not in livres
    assert time(11, 0) in livres
    assert time(14, 0) in livres


def test_horarios_disponiveis_vazio_para_data_passada(servicos):
    assert horarios_disponiveis(REFERENCIA - timedelta(days=3), REFERENCIA) == []


def test_endpoint_de_horarios(client, servicos, segunda):
    _agendar(servicos['jato'], segunda, time(9, 30))
    db.session.commit()

    resposta = client.get(f'/agendamento/horarios?data={segunda.isoformat()}')

    assert resposta.status_code == 200
    dados = resposta.get_json()
    assert dados['data'] == segunda.isoformat()
    assert '09:30' not in dados['horarios']
    assert dados['horarios'][0] == '09:00'
    assert len(dados['horarios']) == 20


def test_endpoint_de_horarios_rejeita_data_invalida(client):
    resposta = client.get('/agendamento/horarios?data=amanha')
    assert resposta.status_code == 400
    assert resposta.get_json()['success'] is False


def test_tabela_de_funcionamento():
    tabela = dict(tabela_funcionamento())
    assert tabela['Segunda-feira'] == '9h às 20h'
    assert tabela['Sábado'] == '9h às 18h'
    assert tabela['Domingo'] == 'Fechado'
