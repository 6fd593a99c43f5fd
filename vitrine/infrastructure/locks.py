"""
Marcador de checkout em andamento sobre o cache do Django.

O cache é compartilhado entre as requisições (e entre os processos, com um
backend como Redis), então um segundo envio do mesmo carrinho é recusado
enquanto o primeiro não termina.
"""
from typing import Optional

from django.conf import settings
from django.core.cache import cache as default_cache

from vitrine.core.ports import ICheckoutLock


class CacheCheckoutLock(ICheckoutLock):
    """Implementa ICheckoutLock com cache.add (só grava se a chave não existir)."""

    PREFIX = 'checkout_em_andamento'

    def __init__(self, cache=None, timeout: Optional[int] = None):
        self.cache = cache if cache is not None else default_cache
        # Expira sozinho se o processo morrer no meio do envio
        self.timeout = timeout if timeout is not None else settings.CHECKOUT_LOCK_TIMEOUT

    def _key(self, cart_id: str) -> str:
        return f'{self.PREFIX}:{cart_id}'

    def acquire(self, cart_id: str) -> bool:
        return self.cache.add(self._key(cart_id), True, self.timeout)

    def release(self, cart_id: str):
        self.cache.delete(self._key(cart_id))
