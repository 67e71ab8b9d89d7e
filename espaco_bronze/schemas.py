# espaco_bronze/schemas.py
from datetime import date, time
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator


class AgendamentoForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    client_name: str = Field(..., min_length=2, max_length=100)
    client_phone: str = Field(..., min_length=10, max_length=20)
    service_id: int
    appointment_date: date
    appointment_time: time
    notes: Optional[str] = Field(default=None, max_length=500)

    @field_validator('notes', mode='before')
    @classmethod
    def notes_vazias(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ServicoForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    duration: int = Field(..., gt=0)
    active: bool = True


class PromocaoForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    original_price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    promotional_price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    valid_until: date
    active: bool = True

    @model_validator(mode='after')
    def preco_promocional(self):
        if self.promotional_price > self.original_price:
            raise ValueError("Preço promocional não pode ser maior que o preço original")
        return self


MENSAGENS = {
    AgendamentoForm: {
        'client_name': "Nome deve ter pelo menos 2 caracteres",
        ('client_name', 'string_too_long'): "Nome deve ter no máximo 100 caracteres",
        ('client_phone', 'string_too_long'): "Telefone deve ter no máximo 20 caracteres",
        'client_phone': "Telefone inválido",
        'service_id': "Selecione um serviço",
        'appointment_date': "Selecione uma data",
        'appointment_time': "Selecione um horário",
        'notes': "Observações devem ter no máximo 500 caracteres",
    },
    ServicoForm: {
        'name': "Informe o nome do serviço",
        'price': "Informe um preço válido",
        'duration': "A duração deve ser maior que zero",
    },
    PromocaoForm: {
        'name': "Informe o nome da promoção",
        'original_price': "Informe um preço original válido",
        'promotional_price': "Informe um preço promocional válido",
        'valid_until': "Informe a data de validade",
    },
}


def _limpar(dados):
    """Campos de formulário vazios contam como ausentes."""
    return {campo: valor for campo, valor in dados.items() if valor not in ('', None)}


def validar(schema, dados):
    """Valida um formulário e devolve (modelo, erros por campo)."""
    try:
        return schema(**_limpar(dados)), {}
    except ValidationError as e:
        mensagens = MENSAGENS.get(schema, {})
        erros = {}
        for erro in e.errors():
            campo = erro['loc'][0] if erro['loc'] else '__all__'
            if campo in erros:
                continue
            if campo == '__all__':
                erros[campo] = erro['msg'].removeprefix('Value error, ')
            else:
                erros[campo] = mensagens.get((campo, erro['type'])) or mensagens.get(campo, erro['msg'])
        return None, erros
