import logging
from typing import Any, List, Optional

import requests
from django.conf import settings

# Importa os Protocols e Entidades da camada Core
from vitrine.core.ports import ICatalogService, IAddressService, IOrderService
from vitrine.core.entities import Address, Order, OrderDraft, OrderReceipt, Product
from vitrine.core.exceptions import (
    AddressNotFoundError,
    AuthenticationRequiredError,
    GatewayError,
    ProductNotFoundError,
)
from vitrine.infrastructure.mappers import AddressMapper, OrderMapper, ProductMapper

logger = logging.getLogger(__name__)


# ====================================================================
# CLIENTE HTTP: comunicação com a API REST da loja.
# ====================================================================

class ApiClient:
    """
    Cliente fino sobre requests para a API remota.
    Repassa o token do cliente como Bearer e converte falhas de transporte
    em exceções do Core.
    """

    def __init__(self, base_url: Optional[str] = None, token: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip('/')
        self.token = token
        self.timeout = timeout if timeout is not None else settings.API_TIMEOUT

    def _headers(self, extra: Optional[dict] = None) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        if extra:
            headers.update(extra)
        return headers

    def request(self, method: str, path: str, json: Any = None, headers: Optional[dict] = None) -> requests.Response:
        """
        Executa a requisição e devolve a resposta.
        404 é devolvido ao chamador; 401 e demais erros viram exceção.
        """
        url = f"{self.base_url}{path}"
        try:
            response = requests.request(
                method, url, json=json, headers=self._headers(headers), timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.warning("Erro de conexão com a API (%s %s): %s", method, url, e)
            raise GatewayError(f"Erro de conexão com a API: {e}")

        if response.status_code == 401:
            raise AuthenticationRequiredError()
        if response.status_code >= 400 and response.status_code != 404:
            logger.warning("API respondeu %s para %s %s", response.status_code, method, url)
            raise GatewayError(
                f"A API respondeu com status {response.status_code}.",
                status_code=response.status_code,
            )
        return response

    def get(self, path: str) -> requests.Response:
        return self.request("GET", path)

    def post(self, path: str, json: Any, headers: Optional[dict] = None) -> requests.Response:
        return self.request("POST", path, json=json, headers=headers)

    def delete(self, path: str) -> requests.Response:
        return self.request("DELETE", path)


# ====================================================================
# GATEWAYS: Implementações concretas das portas do Core.
# ====================================================================

class CatalogGateway(ICatalogService):
    """Consulta de produtos no catálogo remoto."""

    def __init__(self, client: ApiClient):
        self.client = client

    def find_by_id(self, product_id: int) -> Product:
        response = self.client.get(f"/products/{product_id}")
        if response.status_code == 404:
            raise ProductNotFoundError(f"Produto ID {product_id} não encontrado.")
        return ProductMapper.to_entity(response.json())


class AddressGateway(IAddressService):
    """Endereços do usuário autenticado."""

    def __init__(self, client: ApiClient):
        self.client = client

    def find_all_by_user(self) -> List[Address]:
        response = self.client.get("/addresses")
        return [AddressMapper.to_entity(item) for item in response.json()]

    def find_by_id(self, address_id: int) -> Address:
        response = self.client.get(f"/addresses/{address_id}")
        if response.status_code == 404:
            raise AddressNotFoundError(f"Endereço ID {address_id} não encontrado.")
        return AddressMapper.to_entity(response.json())

    def create(self, address: Address) -> Address:
        response = self.client.post("/addresses", json=AddressMapper.to_payload(address))
        return AddressMapper.to_entity(response.json())

    def remove(self, address_id: int):
        response = self.client.delete(f"/addresses/{address_id}")
        if response.status_code == 404:
            raise AddressNotFoundError(f"Endereço ID {address_id} não encontrado.")


class OrderGateway(IOrderService):
    """Criação e listagem de pedidos no servidor."""

    def __init__(self, client: ApiClient):
        self.client = client

    def create(self, draft: OrderDraft) -> OrderReceipt:
        """
        Envia o pedido. A chave de idempotência evita pedido duplicado se o
        mesmo rascunho for reenviado.
        """
        response = self.client.post(
            "/orders",
            json=OrderMapper.to_payload(draft),
            headers={"X-Idempotency-Key": draft.idempotency_key},
        )
        order_id = None
        try:
            order_id = response.json().get("id")
        except (ValueError, AttributeError):
            # Corpo vazio ou não-JSON: o status decide o sucesso
            pass
        return OrderReceipt(id=order_id, status=response.status_code)

    def find_all_by_user(self) -> List[Order]:
        response = self.client.get("/orders")
        return [OrderMapper.to_entity(item) for item in response.json()]
