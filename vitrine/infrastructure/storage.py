"""
Armazenamento durável do carrinho sobre a sessão do Django.

Com o backend de sessão signed_cookies o conteúdo fica no próprio navegador,
sobrevivendo a recarregamentos no mesmo perfil.
"""
from typing import Optional

from vitrine.core.ports import ICartStorage


class SessionCartStorage(ICartStorage):
    """Implementa ICartStorage usando request.session."""

    def __init__(self, session):
        self.session = session

    def get(self, key: str) -> Optional[str]:
        value = self.session.get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str):
        self.session[key] = value
        self.session.modified = True

    def remove(self, key: str):
        if key in self.session:
            del self.session[key]
            self.session.modified = True
