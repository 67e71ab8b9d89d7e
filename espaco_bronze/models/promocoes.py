from espaco_bronze import db

class Promotion(db.Model):
    __tablename__ = 'promotions'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text)
    original_price = db.Column(db.Numeric(10, 2), nullable=False)
    promotional_price = db.Column(db.Numeric(10, 2), nullable=False)
    valid_until = db.Column(db.Date, nullable=False)
    active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp())

    @property
    def discount_percent(self):
        if not self.original_price:
            return 0
        return round((self.original_price - self.promotional_price) / self.original_price * 100)

    @classmethod
    def vigentes(cls, hoje):
        """Promoções ativas e ainda não vencidas, as que vencem primeiro antes."""
        return cls.query.filter_by(active=True).filter(cls.valid_until >= hoje).order_by(cls.valid_until.asc())
