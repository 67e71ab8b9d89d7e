import click
from flask.cli import with_appcontext
from sqlalchemy.exc import IntegrityError

from espaco_bronze import db


@click.command('create-admin')
@click.argument('email')
@click.argument('name')
@click.password_option()
@with_appcontext
def create_admin(email, name, password):
    """Cria um usuário com acesso à área administrativa."""
    from espaco_bronze.models.usuarios import User
    usuario = User(name=name, email=email.strip().lower())
    usuario.set_password(password)
    try:
        db.session.add(usuario)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise click.ClickException(f"Já existe um usuário com o email {email}.")
    click.echo(f"Usuário {usuario.email} criado.")


def init_app(app):
    app.cli.add_command(create_admin)
