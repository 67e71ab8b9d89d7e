from flask import Blueprint, render_template, redirect, url_for, request, flash, current_app
from flask_login import login_user, logout_user, login_required, current_user
from sqlalchemy.exc import IntegrityError
import logging
from urllib.parse import urlsplit

from espaco_bronze import db
from espaco_bronze.models.usuarios import User

bp = Blueprint('auth', __name__, url_prefix='/admin')

logger = logging.getLogger(__name__)

SENHA_MINIMA = 6


def cadastro_aberto():
    return current_app.config.get('ALLOW_ADMIN_SIGNUP') or User.query.count() == 0


def _destino_interno(destino):
    """Aceita apenas caminhos do próprio site, como /admin/financeiro."""
    if not destino or not destino.startswith('/') or destino.startswith('//') or '\\' in destino:
        return None
    partes = urlsplit(destino)
    if partes.scheme or partes.netloc:
        return None
    return destino


@bp.route('/login', methods=['GET', 'POST'])
def login():
    proxima = _destino_interno(request.values.get('next'))
    if current_user.is_authenticated:
        return redirect(proxima or url_for('admin.dashboard'))
    if request.method == 'POST':
        email = request.form.get('email', '').strip().lower()
        password = request.form.get('password', '')

        user = User.query.filter_by(email=email).first()

        if user and user.check_password(password):
            login_user(user)
            logger.info(f"Login de {user.email}")
            return redirect(proxima or url_for('admin.dashboard'))
        logger.info(f"Falha de login para {email}")
        flash("Credenciais inválidas", "danger")

    return render_template('admin/login.html', cadastro_aberto=cadastro_aberto(), proxima=proxima)


@bp.route('/cadastro', methods=['GET', 'POST'])
def cadastro():
    if not cadastro_aberto():
        flash("O cadastro de novos usuários está desativado.", "warning")
        return redirect(url_for('auth.login'))
    if request.method == 'POST':
        name = request.form.get('name', '').strip()
        email = request.form.get('email', '').strip().lower()
        password = request.form.get('password', '')

        if not all([name, email, password]):
            flash("Nome, email e senha são obrigatórios.", "danger")
            return render_template('admin/cadastro.html'), 400
        if len(password) < SENHA_MINIMA:
            flash(f"A senha deve ter pelo menos {SENHA_MINIMA} caracteres.", "danger")
            return render_template('admin/cadastro.html'), 400
        if User.query.filter_by(email=email).first():
            flash("Este email já está cadastrado.", "warning")
            return render_template('admin/cadastro.html'), 400

        user = User(name=name, email=email)
        user.set_password(password)
        try:
            db.session.add(user)
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            flash("Este email já está cadastrado.", "warning")
            return render_template('admin/cadastro.html'), 400
        logger.info(f"Usuário {email} cadastrado")
        flash("Conta criada! Você já pode fazer login.", "success")
        return redirect(url_for('auth.login'))

    return render_template('admin/cadastro.html')


@bp.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    flash("Sessão encerrada.", "info")
    return redirect(url_for('auth.login'))
