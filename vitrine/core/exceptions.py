from typing import Optional


class BaseErroCore(Exception):
    """Classe base para todas as exceções da Camada Core."""
    default_message = "Erro na camada core."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidOptionError(BaseErroCore):
    """Erro levantado quando uma forma de entrega ou pagamento desconhecida chega à fronteira."""
    default_message = "A opção informada não é válida."


# ===============================================
# ERROS DE CATÁLOGO E SERVIÇOS REMOTOS
# ===============================================

class ItemNaoEncontradoError(BaseErroCore):
    """Erro levantado quando um item (genérico) não é encontrado."""
    default_message = "O item solicitado não foi encontrado."


class ProductNotFoundError(ItemNaoEncontradoError):
    """Erro levantado quando um produto específico não existe no catálogo."""
    default_message = "O produto solicitado não foi encontrado."


class AddressNotFoundError(ItemNaoEncontradoError):
    """Erro específico para Endereços não encontrados."""
    default_message = "O endereço solicitado não foi encontrado."


class GatewayError(BaseErroCore):
    """Falha de comunicação com a API remota (rede ou resposta de erro)."""
    default_message = "Erro de comunicação com o serviço remoto."

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class AuthenticationRequiredError(GatewayError):
    """A API remota recusou as credenciais (401): o token expirou ou está ausente."""
    default_message = "Sessão expirada. Faça login novamente."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, status_code=401)


# ===============================================
# ERROS DE FLUXO DE COMPRA
# ===============================================

class EmptyCartError(BaseErroCore):
    """Erro levantado ao tentar fazer checkout com carrinho vazio."""
    default_message = "O carrinho de compras está vazio."


class MissingAddressError(BaseErroCore):
    """Erro levantado ao tentar fazer checkout sem endereço de entrega selecionado."""
    default_message = "Selecione um endereço de entrega."


class CheckoutInProgressError(BaseErroCore):
    """Erro levantado quando já existe um envio de pedido em andamento."""
    default_message = "O pedido já está sendo processado. Aguarde."


class SubmissionError(BaseErroCore):
    """
    Erro levantado quando o serviço de pedidos não confirma a criação.
    O carrinho é preservado, então o cliente pode tentar novamente.
    """
    default_message = "Não foi possível registrar o pedido. Tente novamente."
    retryable = True

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
