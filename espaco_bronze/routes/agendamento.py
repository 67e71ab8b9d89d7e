from flask import Blueprint, render_template, request, flash, jsonify
import logging
from datetime import date, timedelta
from sqlalchemy.exc import IntegrityError

from espaco_bronze import db
from espaco_bronze.horarios import hoje, data_agendavel, horarios_disponiveis
from espaco_bronze.models.servicos import Service
from espaco_bronze.models.agendamentos import Appointment, STATUS_PENDENTE
from espaco_bronze.schemas import AgendamentoForm, validar

bp = Blueprint('agendamento', __name__, url_prefix='/agendamento')

logger = logging.getLogger(__name__)

CAMPOS = ('client_name', 'client_phone', 'service_id', 'appointment_date', 'appointment_time', 'notes')


def _ler_data(valor):
    try:
        return date.fromisoformat(valor) if valor else None
    except ValueError:
        return None


def _servicos_ativos():
    return Service.query.filter_by(active=True).order_by(Service.name).all()


def _renderizar_formulario(form, erros=None, status=200):
    """Monta o formulário em etapas: serviço, data, horário e dados do cliente."""
    servicos = _servicos_ativos()
    servico = None
    if form.get('service_id'):
        servico = next((s for s in servicos if str(s.id) == str(form['service_id'])), None)
    data = _ler_data(form.get('appointment_date'))
    horarios = horarios_disponiveis(data) if data else []
    return render_template(
        'agendamento.html',
        servicos=servicos,
        servico=servico,
        data=data,
        horarios=horarios,
        form=form,
        erros=erros or {},
        data_minima=hoje() + timedelta(days=1),
    ), status


@bp.route('', methods=['GET'])
def formulario():
    form = {
        'service_id': request.args.get('servico', ''),
        'appointment_date': request.args.get('data', ''),
    }
    if form['appointment_date'] and _ler_data(form['appointment_date']) is None:
        flash("Data inválida. Use o formato AAAA-MM-DD.", "danger")
        form['appointment_date'] = ''
    return _renderizar_formulario(form)


@bp.route('', methods=['POST'])
def agendar():
    form = {campo: request.form.get(campo, '') for campo in CAMPOS}
    dados, erros = validar(AgendamentoForm, form)
    if erros:
        return _renderizar_formulario(form, erros, 400)

    servico = db.session.get(Service, dados.service_id)
    if servico is None or not servico.active:
        return _renderizar_formulario(form, {'service_id': "Selecione um serviço"}, 400)

    if not data_agendavel(dados.appointment_date, hoje()):
        return _renderizar_formulario(
            form, {'appointment_date': "Escolha uma data a partir de amanhã, de segunda a sábado."}, 400)

    if dados.appointment_time not in horarios_disponiveis(dados.appointment_date):
        return _renderizar_formulario(
            form, {'appointment_time': "Horário indisponível. Escolha outro horário."}, 400)

    agendamento = Appointment(
        client_name=dados.client_name,
        client_phone=dados.client_phone,
        service_id=servico.id,
        appointment_date=dados.appointment_date,
        appointment_time=dados.appointment_time,
        notes=dados.notes,
        price=servico.price,
        status=STATUS_PENDENTE,
    )
    try:
        db.session.add(agendamento)
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        logger.error(f"Horário já ocupado ao agendar {dados.appointment_date} {dados.appointment_time}: {str(e)}")
        return _renderizar_formulario(
            form, {'appointment_time': "Este horário acabou de ser reservado. Escolha outro horário."}, 409)
    except Exception as e:
        db.session.rollback()
        logger.error(f"Erro ao agendar: {str(e)}")
        flash("Ocorreu um erro ao agendar. Tente novamente.", "danger")
        return _renderizar_formulario(form, status=500)

    logger.info(f"Agendamento {agendamento.id} criado para {agendamento.appointment_date} {agendamento.appointment_time}")
    flash("Agendamento enviado! Entraremos em contato para confirmar seu horário.", "success")
    mensagem = (
        f"Olá! Acabei de fazer um agendamento para {servico.name} no dia "
        f"{agendamento.appointment_date.strftime('%d/%m/%Y')} às {agendamento.appointment_time.strftime('%H:%M')}."
    )
    return render_template('agendamento_sucesso.html', agendamento=agendamento, servico=servico,
                           mensagem_whatsapp=mensagem)


@bp.route('/horarios')
def horarios():
    data = _ler_data(request.args.get('data'))
    if data is None:
        return jsonify({'success': False, 'message': 'Informe uma data no formato AAAA-MM-DD.'}), 400
    livres = horarios_disponiveis(data)
    return jsonify({'data': data.isoformat(), 'horarios': [h.strftime('%H:%M') for h in livres]})
