from flask import Flask, render_template
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_migrate import Migrate
import logging

# Inicialização das extensões fora da create_app
db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()

def create_app(test_config=None):
    # Criação da aplicação
    app = Flask(__name__)

    # Configuração carregada de config.py; test_config sobrescreve antes das extensões
    app.config.from_object('config.Config')
    if test_config:
        app.config.update(test_config)

    logging.basicConfig(level=app.config.get('LOG_LEVEL', 'INFO'))

    # Inicialização das extensões com a aplicação
    try:
        db.init_app(app)
        migrate.init_app(app, db)
        login_manager.init_app(app)
        login_manager.login_view = 'auth.login'
        login_manager.login_message = "Faça login para acessar a área administrativa."
        login_manager.login_message_category = "warning"
    except Exception as e:
        app.logger.error(f"Erro ao inicializar extensões: {e}")
        raise

    # Carregamento do usuário para o Flask-Login
    @login_manager.user_loader
    def load_user(user_id):
        from espaco_bronze.models.usuarios import User
        return db.session.get(User, int(user_id))

    # Registro dos blueprints
    from espaco_bronze.routes.home import bp as home_bp
    app.register_blueprint(home_bp, url_prefix='/')  # Páginas públicas
    from espaco_bronze.routes.agendamento import bp as agendamento_bp
    app.register_blueprint(agendamento_bp, url_prefix='/agendamento')  # Agendamento
    from espaco_bronze.routes.auth import bp as auth_bp
    app.register_blueprint(auth_bp, url_prefix='/admin')  # Login do admin
    from espaco_bronze.routes.admin import bp as admin_bp
    app.register_blueprint(admin_bp, url_prefix='/admin')  # Admin

    from espaco_bronze.formatters import init_app as init_formatters
    init_formatters(app)

    from espaco_bronze.commands import init_app as init_commands
    init_commands(app)

    @app.errorhandler(404)
    def pagina_nao_encontrada(e):
        return render_template('404.html'), 404

    # Importação dos modelos dentro do contexto da aplicação
    with app.app_context():
        try:
            from espaco_bronze.models.usuarios import User
            from espaco_bronze.models.servicos import Service
            from espaco_bronze.models.agendamentos import Appointment
            from espaco_bronze.models.promocoes import Promotion
            from espaco_bronze.models.financeiro import FinancialEntry
        except Exception as e:
            app.logger.error(f"Erro ao carregar modelos: {e}")
            raise

    return app

if __name__ == '__main__':
    from config import settings
    app = create_app()
    app.run(debug=True, port=settings.APP_PORT)
