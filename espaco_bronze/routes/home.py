from flask import Blueprint, render_template
import logging

from espaco_bronze.horarios import hoje, tabela_funcionamento
from espaco_bronze.models.servicos import Service
from espaco_bronze.models.promocoes import Promotion

bp = Blueprint('home', __name__, url_prefix='/')

logger = logging.getLogger(__name__)

@bp.route('/')
def index():
    servicos = Service.query.filter_by(active=True).order_by(Service.name).limit(3).all()
    promocoes = Promotion.vigentes(hoje()).all()
    return render_template('index.html', servicos=servicos, promocoes=promocoes)

@bp.route('/servicos')
def servicos():
    servicos = Service.query.filter_by(active=True).order_by(Service.name).all()
    return render_template('servicos.html', servicos=servicos)

@bp.route('/precos')
def precos():
    servicos = Service.query.filter_by(active=True).order_by(Service.price.asc()).all()
    tem_promocoes = Promotion.vigentes(hoje()).count() > 0
    return render_template('precos.html', servicos=servicos, tem_promocoes=tem_promocoes)

@bp.route('/promocoes')
def promocoes():
    promocoes = Promotion.vigentes(hoje()).all()
    return render_template('promocoes.html', promocoes=promocoes)

@bp.route('/contato')
def contato():
    return render_template('contato.html', funcionamento=tabela_funcionamento())
