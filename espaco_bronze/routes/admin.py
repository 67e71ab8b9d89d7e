from flask import Blueprint, render_template, redirect, url_for, request, flash, jsonify
from flask_login import login_required
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from datetime import timedelta
from decimal import Decimal
import logging

from espaco_bronze import db
from espaco_bronze.horarios import hoje
from espaco_bronze.models.servicos import Service
from espaco_bronze.models.agendamentos import Appointment, STATUS_PENDENTE, STATUS_LABELS
from espaco_bronze.models.promocoes import Promotion
from espaco_bronze.models.financeiro import FinancialEntry, METODOS_PAGAMENTO
from espaco_bronze.schemas import ServicoForm, PromocaoForm, validar
from espaco_bronze.status import alterar_status, TransicaoInvalida, PagamentoObrigatorio

bp = Blueprint('admin', __name__, url_prefix='/admin')

logger = logging.getLogger(__name__)


def _faturamento(desde, ate=None):
    consulta = db.session.query(func.sum(FinancialEntry.amount)).filter(FinancialEntry.entry_date >= desde)
    if ate is not None:
        consulta = consulta.filter(FinancialEntry.entry_date <= ate)
    return consulta.scalar() or Decimal('0')


def _periodos():
    today = hoje()
    return {
        'hoje': today,
        'semana': today - timedelta(days=today.weekday()),  # Início da semana (segunda)
        'mes': today.replace(day=1),
        'ano': today.replace(month=1, day=1),
    }


@bp.route('')
@login_required
def dashboard():
    today = hoje()
    periodos = _periodos()
    stats = {
        'agendamentos_hoje': Appointment.query.filter_by(appointment_date=today).count(),
        'agendamentos_pendentes': Appointment.query.filter_by(status=STATUS_PENDENTE).count(),
        'faturamento_hoje': _faturamento(today, today),
        'faturamento_mes': _faturamento(periodos['mes']),
    }
    logger.debug(f"Estatísticas do painel: {stats}")

    if request.headers.get('X-Requested-With') == 'XMLHttpRequest':
        return jsonify({chave: float(valor) if isinstance(valor, Decimal) else valor for chave, valor in stats.items()})

    return render_template('admin/dashboard.html', stats=stats)


# ---------------------------------------------------------------- agendamentos

@bp.route('/agendamentos')
@login_required
def agendamentos():
    filtro = request.args.get('status')
    consulta = Appointment.query
    if filtro in STATUS_LABELS:
        consulta = consulta.filter_by(status=filtro)
    agendamentos = consulta.order_by(Appointment.appointment_date.desc(), Appointment.appointment_time.desc()).all()
    return render_template('admin/agendamentos.html', agendamentos=agendamentos, filtro=filtro,
                           status_labels=STATUS_LABELS)


@bp.route('/agendamentos/<int:id_agendamento>/status', methods=['POST'])
@login_required
def alterar_status_agendamento(id_agendamento):
    agendamento = db.get_or_404(Appointment, id_agendamento)
    novo_status = request.form.get('status', '')
    metodo_pagamento = request.form.get('payment_method') or None

    try:
        alterar_status(agendamento, novo_status, metodo_pagamento)
    except PagamentoObrigatorio as e:
        if metodo_pagamento:
            flash(str(e), "danger")
        # Etapa de escolha da forma de pagamento antes de concluir
        return render_template('admin/pagamento.html', agendamento=agendamento, metodos=METODOS_PAGAMENTO)
    except TransicaoInvalida as e:
        flash(str(e), "danger")
        return redirect(url_for('admin.agendamentos'))
    except Exception as e:
        logger.error(f"Erro ao atualizar status do agendamento {id_agendamento}: {str(e)}")
        flash("Ocorreu um erro ao atualizar o status. Tente novamente.", "danger")
        return redirect(url_for('admin.agendamentos'))

    flash("Status atualizado!", "success")
    return redirect(url_for('admin.agendamentos'))


# ------------------------------------------------------------------ financeiro

@bp.route('/financeiro')
@login_required
def financeiro():
    lancamentos = FinancialEntry.query.order_by(FinancialEntry.entry_date.desc(), FinancialEntry.id.desc()).all()
    total = sum((lancamento.amount for lancamento in lancamentos), Decimal('0'))

    por_metodo = {metodo: Decimal('0') for metodo in METODOS_PAGAMENTO}
    for metodo, soma in db.session.query(FinancialEntry.payment_method, func.sum(FinancialEntry.amount)) \
            .group_by(FinancialEntry.payment_method).all():
        por_metodo[metodo] = soma or Decimal('0')

    today = hoje()
    faturamento = {nome: _faturamento(inicio, today) for nome, inicio in _periodos().items()}

    return render_template('admin/financeiro.html', lancamentos=lancamentos, total=total,
                           por_metodo=por_metodo, metodos=METODOS_PAGAMENTO, faturamento=faturamento)


# -------------------------------------------------------------------- serviços

def _dados_formulario(*campos):
    dados = {campo: request.form.get(campo, '') for campo in campos}
    dados['active'] = 'active' in request.form
    return dados


@bp.route('/servicos')
@login_required
def servicos():
    servicos = Service.query.order_by(Service.name).all()
    return render_template('admin/servicos.html', servicos=servicos)


@bp.route('/servicos/novo', methods=['GET', 'POST'])
@login_required
def novo_servico():
    if request.method == 'POST':
        form = _dados_formulario('name', 'description', 'price', 'duration')
        dados, erros = validar(ServicoForm, form)
        if erros:
            return render_template('admin/servico_form.html', servico=None, form=form, erros=erros), 400
        try:
            servico = Service(**dados.model_dump())
            db.session.add(servico)
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            flash("Erro: não foi possível salvar o serviço.", "danger")
            return render_template('admin/servico_form.html', servico=None, form=form, erros={}), 400
        logger.info(f"Serviço {servico.id} criado: {servico.name}")
        flash("Salvo!", "success")
        return redirect(url_for('admin.servicos'))
    return render_template('admin/servico_form.html', servico=None, form={'active': True}, erros={})


@bp.route('/servicos/<int:id_servico>/editar', methods=['GET', 'POST'])
@login_required
def editar_servico(id_servico):
    servico = db.get_or_404(Service, id_servico)
    if request.method == 'POST':
        form = _dados_formulario('name', 'description', 'price', 'duration')
        dados, erros = validar(ServicoForm, form)
        if erros:
            return render_template('admin/servico_form.html', servico=servico, form=form, erros=erros), 400
        for campo, valor in dados.model_dump().items():
            setattr(servico, campo, valor)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            flash("Erro: não foi possível atualizar o serviço.", "danger")
            return render_template('admin/servico_form.html', servico=servico, form=form, erros={}), 400
        logger.info(f"Serviço {servico.id} atualizado")
        flash("Salvo!", "success")
        return redirect(url_for('admin.servicos'))
    form = {
        'name': servico.name,
        'description': servico.description or '',
        'price': servico.price,
        'duration': servico.duration,
        'active': servico.active,
    }
    return render_template('admin/servico_form.html', servico=servico, form=form, erros={})


@bp.route('/servicos/<int:id_servico>/alternar', methods=['POST'])
@login_required
def alternar_servico(id_servico):
    servico = db.get_or_404(Service, id_servico)
    servico.active = not servico.active
    try:
        db.session.commit()
        logger.info(f"Serviço {servico.id} {'ativado' if servico.active else 'desativado'}")
    except Exception as e:
        db.session.rollback()
        logger.error(f"Erro ao alterar serviço {id_servico}: {str(e)}")
        flash("Ocorreu um erro ao alterar o serviço.", "danger")
    return redirect(url_for('admin.servicos'))


@bp.route('/servicos/<int:id_servico>/excluir', methods=['POST'])
@login_required
def excluir_servico(id_servico):
    servico = db.get_or_404(Service, id_servico)
    if servico.appointments:
        flash("Este serviço possui agendamentos e não pode ser excluído. Desative-o para ocultá-lo do site.", "danger")
        return redirect(url_for('admin.servicos'))
    try:
        db.session.delete(servico)
        db.session.commit()
        flash("Excluído!", "success")
    except IntegrityError:
        db.session.rollback()
        flash("Erro: não foi possível excluir o serviço, ele pode estar em uso.", "danger")
    return redirect(url_for('admin.servicos'))


# ------------------------------------------------------------------- promoções

@bp.route('/promocoes')
@login_required
def promocoes():
    promocoes = Promotion.query.order_by(Promotion.created_at.desc(), Promotion.id.desc()).all()
    return render_template('admin/promocoes.html', promocoes=promocoes, hoje=hoje())


@bp.route('/promocoes/nova', methods=['GET', 'POST'])
@login_required
def nova_promocao():
    if request.method == 'POST':
        form = _dados_formulario('name', 'description', 'original_price', 'promotional_price', 'valid_until')
        dados, erros = validar(PromocaoForm, form)
        if erros:
            return render_template('admin/promocao_form.html', promocao=None, form=form, erros=erros), 400
        try:
            promocao = Promotion(**dados.model_dump())
            db.session.add(promocao)
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            flash("Erro: não foi possível salvar a promoção.", "danger")
            return render_template('admin/promocao_form.html', promocao=None, form=form, erros={}), 400
        logger.info(f"Promoção {promocao.id} criada: {promocao.name}")
        flash("Salvo!", "success")
        return redirect(url_for('admin.promocoes'))
    return render_template('admin/promocao_form.html', promocao=None, form={'active': True}, erros={})


@bp.route('/promocoes/<int:id_promocao>/editar', methods=['GET', 'POST'])
@login_required
def editar_promocao(id_promocao):
    promocao = db.get_or_404(Promotion, id_promocao)
    if request.method == 'POST':
        form = _dados_formulario('name', 'description', 'original_price', 'promotional_price', 'valid_until')
        dados, erros = validar(PromocaoForm, form)
        if erros:
            return render_template('admin/promocao_form.html', promocao=promocao, form=form, erros=erros), 400
        for campo, valor in dados.model_dump().items():
            setattr(promocao, campo, valor)
        try:
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            logger.error(f"Erro ao atualizar promoção {id_promocao}: {str(e)}")
            flash("Ocorreu um erro ao atualizar a promoção.", "danger")
            return render_template('admin/promocao_form.html', promocao=promocao, form=form, erros={}), 500
        logger.info(f"Promoção {promocao.id} atualizada")
        flash("Salvo!", "success")
        return redirect(url_for('admin.promocoes'))
    form = {
        'name': promocao.name,
        'description': promocao.description or '',
        'original_price': promocao.original_price,
        'promotional_price': promocao.promotional_price,
        'valid_until': promocao.valid_until.isoformat(),
        'active': promocao.active,
    }
    return render_template('admin/promocao_form.html', promocao=promocao, form=form, erros={})


@bp.route('/promocoes/<int:id_promocao>/alternar', methods=['POST'])
@login_required
def alternar_promocao(id_promocao):
    promocao = db.get_or_404(Promotion, id_promocao)
    promocao.active = not promocao.active
    try:
        db.session.commit()
        logger.info(f"Promoção {promocao.id} {'ativada' if promocao.active else 'desativada'}")
    except Exception as e:
        db.session.rollback()
        logger.error(f"Erro ao alterar promoção {id_promocao}: {str(e)}")
        flash("Ocorreu um erro ao alterar a promoção.", "danger")
    return redirect(url_for('admin.promocoes'))


@bp.route('/promocoes/<int:id_promocao>/excluir', methods=['POST'])
@login_required
def excluir_promocao(id_promocao):
    promocao = db.get_or_404(Promotion, id_promocao)
    try:
        db.session.delete(promocao)
        db.session.commit()
        flash("Excluído!", "success")
    except Exception as e:
        db.session.rollback()
        logger.error(f"Erro ao excluir promoção {id_promocao}: {str(e)}")
        flash("Ocorreu um erro ao excluir a promoção.", "danger")
    return redirect(url_for('admin.promocoes'))
