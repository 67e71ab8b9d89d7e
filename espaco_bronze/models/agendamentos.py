from sqlalchemy import Enum
from espaco_bronze import db

STATUS_PENDENTE = 'pending'
STATUS_CONCLUIDO = 'completed'
STATUS_CANCELADO = 'cancelled'

STATUS_LABELS = {
    STATUS_PENDENTE: 'Pendente',
    STATUS_CONCLUIDO: 'Concluído',
    STATUS_CANCELADO: 'Cancelado',
}

class Appointment(db.Model):
    __tablename__ = 'appointments'
    id = db.Column(db.Integer, primary_key=True)
    client_name = db.Column(db.String(100), nullable=False)
    client_phone = db.Column(db.String(20), nullable=False)
    service_id = db.Column(db.Integer, db.ForeignKey('services.id'), nullable=False)
    appointment_date = db.Column(db.Date, nullable=False)
    appointment_time = db.Column(db.Time, nullable=False)
    notes = db.Column(db.Text)
    price = db.Column(db.Numeric(10, 2), nullable=False)  # Preço do serviço no momento do agendamento
    status = db.Column(Enum(STATUS_PENDENTE, STATUS_CONCLUIDO, STATUS_CANCELADO, name='appointment_status'),
                       nullable=False, default=STATUS_PENDENTE)
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp())

    # Um horário só pode ter um agendamento que não esteja cancelado
    __table_args__ = (
        db.Index('uq_appointments_slot', 'appointment_date', 'appointment_time', unique=True,
                 postgresql_where=db.text("status != 'cancelled'"),
                 sqlite_where=db.text("status != 'cancelled'")),
    )

    financial_entry = db.relationship('FinancialEntry', backref='appointment', uselist=False, lazy=True)

    @property
    def status_label(self):
        return STATUS_LABELS.get(self.status, self.status)
