import os

os.environ.setdefault("SECRET_KEY", "chave-de-teste")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, time, timedelta
from zoneinfo import ZoneInfo
from decimal import Decimal

import pytest

from espaco_bronze import create_app, db
from espaco_bronze.models.usuarios import User
from espaco_bronze.models.servicos import Service
from espaco_bronze.models.agendamentos import Appointment


def proxima_segunda():
    hoje = datetime.now(ZoneInfo("America/Sao_Paulo")).date()
    return hoje + timedelta(days=7 - hoje.weekday())


@pytest.fixture
def app():
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'SECRET_KEY': 'chave-de-teste',
        'ALLOW_ADMIN_SIGNUP': False,
    })
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def usuario(app):
    user = User(name="Carla", email="carla@espacobronze.com.br")
    user.set_password("bronze123")
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def admin_client(client, usuario):
    resposta = client.post('/admin/login', data={'email': usuario.email, 'password': 'bronze123'})
    assert resposta.status_code == 302
    return client


@pytest.fixture
def servicos(app):
    jato = Service(name="Bronzeamento a Jato", description="Rápido e uniforme",
                   price=Decimal('80.00'), duration=30)
    natural = Service(name="Bronzeamento Natural", description="Com fita",
                      price=Decimal('120.00'), duration=60)
    inativo = Service(name="Esfoliação", price=Decimal('50.00'), duration=30, active=False)
    db.session.add_all([jato, natural, inativo])
    db.session.commit()
    return {'jato': jato, 'natural': natural, 'inativo': inativo}


@pytest.fixture
def agendamento(servicos):
    agendamento = Appointment(
        client_name="Maria Souza",
        client_phone="21999998888",
        service_id=servicos['jato'].id,
        appointment_date=proxima_segunda(),
        appointment_time=time(10, 0),
        price=servicos['jato'].price,
    )
    db.session.add(agendamento)
    db.session.commit()
    return agendamento


@pytest.fixture
def segunda():
    return proxima_segunda()
