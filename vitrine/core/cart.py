# vitrine/core/cart.py
# Gerencia o estado do Carrinho de Compras e sua persistência no armazenamento do cliente.

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from vitrine.core.entities import Cart, CartItem, Product, clamp_quantity
from vitrine.core.money import Money
from vitrine.core.ports import ICartStorage

logger = logging.getLogger(__name__)


class CartStore:
    """
    Dono exclusivo do carrinho durante a sessão de navegação/checkout.

    Toda mutação é aplicada em memória e persistida em seguida no armazenamento
    durável, então o carrinho sobrevive a recarregamentos da página.
    """

    DEFAULT_STORAGE_KEY = 'carrinho_vitrine'

    def __init__(self, storage: ICartStorage, storage_key: str = DEFAULT_STORAGE_KEY):
        """Inicializa o CartStore e carrega o carrinho do armazenamento."""
        self.storage = storage
        self.storage_key = storage_key
        self.carrinho: Cart = self._load()

    # --- Métodos de Persistência ---

    def _load(self) -> Cart:
        """
        Carrega o Carrinho do armazenamento.
        Se não existir (ou estiver corrompido), cria um novo Carrinho vazio.
        """
        raw = self.storage.get(self.storage_key)
        if not raw:
            return Cart()

        try:
            data = json.loads(raw)
            carrinho = Cart(id=str(data.get('id') or Cart().id))
            for raw_item in data.get('items', []):
                product = _product_from_dict(raw_item['product'])
                existente = carrinho.get_item(product.id)
                if existente:
                    existente.quantity = clamp_quantity(existente.quantity + int(raw_item['quantity']))
                else:
                    carrinho.items.append(CartItem(product, clamp_quantity(raw_item['quantity'])))
            return carrinho
        except (ValueError, KeyError, TypeError, AttributeError, ArithmeticError) as e:
            logger.warning("Carrinho armazenado em '%s' descartado: %s", self.storage_key, e)
            return Cart()

    def _save(self):
        """Serializa o Carrinho em JSON e grava no armazenamento."""
        data = {
            'id': self.carrinho.id,
            'items': [
                {'product': _product_to_dict(item.product), 'quantity': item.quantity}
                for item in self.carrinho.items
            ],
        }
        self.storage.set(self.storage_key, json.dumps(data))

    # --- Métodos de Manipulação ---

    def add_item(self, product: Product, quantity: int = 1):
        """
        Adiciona o produto ao carrinho ou soma à quantidade existente.
        O excedente acima do limite é descartado (a quantidade é limitada, não estoura).
        Quantidades menores que 1 contam como 1: adicionar nunca diminui uma linha.
        """
        incremento = clamp_quantity(quantity)
        existente = self.carrinho.get_item(product.id)
        if existente:
            existente.quantity = clamp_quantity(existente.quantity + incremento)
        else:
            self.carrinho.items.append(CartItem(product=product, quantity=incremento))
        self._save()

    def update_quantity(self, product_id: int, quantity: int):
        """
        Substitui a quantidade de um item existente.
        Produto ausente é ignorado; valores fora do intervalo são limitados, nunca removem o item.
        """
        existente = self.carrinho.get_item(product_id)
        if not existente:
            return
        existente.quantity = clamp_quantity(quantity)
        self._save()

    def remove_item(self, product_id: int):
        """Remove completamente um item do carrinho."""
        restantes = [item for item in self.carrinho.items if item.product.id != product_id]
        if len(restantes) == len(self.carrinho.items):
            return
        self.carrinho.items = restantes
        self._save()

    def clear(self):
        """Esvazia o carrinho e limpa o armazenamento (após o checkout ou no logout)."""
        self.carrinho = Cart()
        self.storage.remove(self.storage_key)

    # --- Métodos de Consulta ---

    @property
    def cart_id(self) -> str:
        return self.carrinho.id

    @property
    def items(self) -> Tuple[CartItem, ...]:
        """Itens na ordem de inserção (somente leitura)."""
        return tuple(self.carrinho.items)

    def is_empty(self) -> bool:
        return self.carrinho.is_empty()

    def get_total_items(self) -> int:
        """Retorna a contagem total de unidades no carrinho (badge do ícone)."""
        return sum(item.quantity for item in self.carrinho.items)

    def get_subtotal(self) -> Money:
        """
        Soma de preço * quantidade de todos os itens.
        O arredondamento acontece uma única vez, sobre a soma exata.
        """
        exato = sum((item.product.price * item.quantity for item in self.carrinho.items), Money.zero())
        return exato.round2()

    def line_total(self, product_id: int) -> Optional[Money]:
        """Total de uma linha para exibição, ou None se o produto não estiver no carrinho."""
        item = self.carrinho.get_item(product_id)
        return item.line_total if item else None

    def snapshot(self) -> List[CartItem]:
        """Cópia dos itens, desacoplada de mutações posteriores."""
        return [CartItem(product=item.product, quantity=item.quantity) for item in self.carrinho.items]


def _product_to_dict(product: Product) -> Dict[str, Any]:
    return {
        'id': product.id,
        'name': product.name,
        'price': str(product.price.amount),
        'category': product.category,
        'image_url': product.image_url,
    }


def _product_from_dict(data: Dict[str, Any]) -> Product:
    return Product(
        id=int(data['id']),
        name=data['name'],
        price=Money.of(data['price']),
        category=data.get('category'),
        image_url=data.get('image_url'),
    )
