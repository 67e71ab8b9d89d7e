from decimal import Decimal
from urllib.parse import quote

from flask import current_app


def moeda(valor):
    """Formata um valor em reais: 1234.5 -> 'R$ 1.234,50'."""
    valor = Decimal(valor or 0).quantize(Decimal('0.01'))
    texto = f"{valor:,.2f}".replace(',', '_').replace('.', ',').replace('_', '.')
    return f"R$ {texto}"


def data_br(data):
    return data.strftime('%d/%m/%Y') if data else ''


def hora(valor):
    return valor.strftime('%H:%M') if valor else ''


def link_whatsapp(texto=None):
    url = f"https://wa.me/{current_app.config['WHATSAPP_NUMBER']}"
    if texto:
        url += f"?text={quote(texto)}"
    return url


def init_app(app):
    app.add_template_filter(moeda)
    app.add_template_filter(data_br)
    app.add_template_filter(hora)

    # Contexto para todos os templates
    @app.context_processor
    def inject_negocio():
        return dict(
            nome_negocio=app.config['BUSINESS_NAME'],
            link_whatsapp=link_whatsapp,
            link_instagram=app.config['INSTAGRAM_URL'],
        )
