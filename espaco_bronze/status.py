import logging

from espaco_bronze import db
from espaco_bronze.horarios import hoje
from espaco_bronze.models.agendamentos import STATUS_PENDENTE, STATUS_CONCLUIDO, STATUS_CANCELADO, STATUS_LABELS
from espaco_bronze.models.financeiro import FinancialEntry, METODOS_PAGAMENTO

logger = logging.getLogger(__name__)

TRANSICOES = {
    STATUS_PENDENTE: {STATUS_CONCLUIDO, STATUS_CANCELADO},
    STATUS_CONCLUIDO: set(),
    STATUS_CANCELADO: set(),
}


class TransicaoInvalida(ValueError):
    pass


class PagamentoObrigatorio(ValueError):
    pass


def alterar_status(agendamento, novo_status, metodo_pagamento=None):
    """Muda o status de um agendamento.

    Concluir exige a forma de pagamento e grava o lançamento financeiro na
    mesma transação da mudança de status. Devolve o lançamento criado, ou None.
    """
    if novo_status not in TRANSICOES:
        raise TransicaoInvalida(f"Status desconhecido: {novo_status}")
    if novo_status not in TRANSICOES[agendamento.status]:
        raise TransicaoInvalida(
            f"Não é possível mudar de {STATUS_LABELS[agendamento.status]} para {STATUS_LABELS[novo_status]}."
        )

    lancamento = None
    if novo_status == STATUS_CONCLUIDO:
        if not metodo_pagamento:
            raise PagamentoObrigatorio("Selecione a forma de pagamento para concluir o atendimento.")
        if metodo_pagamento not in METODOS_PAGAMENTO:
            raise PagamentoObrigatorio(f"Forma de pagamento inválida: {metodo_pagamento}")
        if agendamento.financial_entry is not None:
            raise TransicaoInvalida("Este agendamento já possui lançamento financeiro.")
        lancamento = FinancialEntry(
            appointment=agendamento,
            service_name=agendamento.service.name if agendamento.service else "Serviço removido",
            amount=agendamento.price,
            payment_method=metodo_pagamento,
            entry_date=hoje(),
        )
        db.session.add(lancamento)

    agendamento.status = novo_status
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.error(f"Erro ao alterar status do agendamento {agendamento.id} para {novo_status}")
        raise

    logger.info(f"Agendamento {agendamento.id} alterado para {novo_status}"
                + (f" ({metodo_pagamento}, R$ {agendamento.price})" if lancamento else ""))
    return lancamento
