"""Grade de horários do salão e cálculo dos horários livres de um dia.

Os horários são fatias de 30 minutos. O último horário de cada dia é o último
início de sessão aceito, meia hora ou uma hora antes do fechamento.
"""
import logging
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from flask import current_app

from espaco_bronze import db
from espaco_bronze.models.agendamentos import Appointment, STATUS_CANCELADO

logger = logging.getLogger(__name__)

INTERVALO = timedelta(minutes=30)

# Funcionamento por dia da semana (0 = segunda ... 6 = domingo):
# (primeiro horário, último horário, fechamento)
HORARIOS = {
    0: (time(9, 0), time(19, 0), time(20, 0)),  # Segunda
    1: (time(9, 0), time(19, 0), time(20, 0)),  # Terça
    2: (time(9, 0), time(19, 0), time(20, 0)),  # Quarta
    3: (time(9, 0), time(19, 0), time(20, 0)),  # Quinta
    4: (time(9, 0), time(19, 0), time(20, 0)),  # Sexta
    5: (time(9, 0), time(17, 30), time(18, 0)),  # Sábado
    6: None,  # Domingo (FECHADO)
}

DIAS_SEMANA = ['Segunda-feira', 'Terça-feira', 'Quarta-feira', 'Quinta-feira',
               'Sexta-feira', 'Sábado', 'Domingo']


def hoje() -> date:
    """Data atual no fuso horário do salão."""
    fuso = current_app.config.get('TIMEZONE', 'America/Sao_Paulo')
    return datetime.now(ZoneInfo(fuso)).date()


def grade_do_dia(data: date) -> list[time]:
    horario = HORARIOS[data.weekday()]
    if horario is None:
        return []
    inicio, fim, _ = horario
    atual = datetime.combine(data, inicio)
    ultimo = datetime.combine(data, fim)
    grade = []
    while atual <= ultimo:
        grade.append(atual.time())
        atual += INTERVALO
    return grade


def data_agendavel(data: date, referencia: date) -> bool:
    """Só aceita datas a partir de amanhã e fora do domingo."""
    return data > referencia and HORARIOS[data.weekday()] is not None


def horarios_livres(data: date, ocupados, referencia: date) -> list[time]:
    if not data_agendavel(data, referencia):
        return []
    ocupados = set(ocupados)
    return [horario for horario in grade_do_dia(data) if horario not in ocupados]


def horarios_ocupados(data: date) -> list[time]:
    linhas = db.session.query(Appointment.appointment_time).filter(
        Appointment.appointment_date == data,
        Appointment.status != STATUS_CANCELADO,
    ).all()
    return [linha.appointment_time for linha in linhas]


def horarios_disponiveis(data: date, referencia: date = None) -> list[time]:
    referencia = referencia or hoje()
    if not data_agendavel(data, referencia):
        logger.debug(f"Data {data} indisponível para agendamento (referência {referencia})")
        return []
    return horarios_livres(data, horarios_ocupados(data), referencia)


def tabela_funcionamento():
    """Linhas (dia, texto) para a página de contato."""
    linhas = []
    for dia, nome in enumerate(DIAS_SEMANA):
        horario = HORARIOS[dia]
        if horario is None:
            linhas.append((nome, 'Fechado'))
        else:
            linhas.append((nome, f"{horario[0].hour}h às {horario[2].hour}h"))
    return linhas
