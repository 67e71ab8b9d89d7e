from sqlalchemy import Enum
from espaco_bronze import db

METODOS_PAGAMENTO = {
    'cash': 'Dinheiro',
    'pix': 'PIX',
    'credit_card': 'Cartão de Crédito',
    'debit_card': 'Cartão de Débito',
}

class FinancialEntry(db.Model):
    __tablename__ = 'financial_entries'
    id = db.Column(db.Integer, primary_key=True)
    appointment_id = db.Column(db.Integer, db.ForeignKey('appointments.id'), unique=True, nullable=True)
    service_name = db.Column(db.String(100), nullable=False)  # Cópia do nome do serviço
    amount = db.Column(db.Numeric(10, 2), nullable=False)
    payment_method = db.Column(Enum(*METODOS_PAGAMENTO, name='payment_method'), nullable=False)
    entry_date = db.Column(db.Date, nullable=False)  # Data do atendimento no fuso do salão
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp())

    @property
    def payment_label(self):
        return METODOS_PAGAMENTO.get(self.payment_method, self.payment_method)
