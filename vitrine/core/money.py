# vitrine/core/money.py
"""
Tipo de valor monetário da camada Core.

Toda a aritmética de preços passa por aqui usando Decimal, evitando o acúmulo
de erro de ponto flutuante nas somas e percentuais do checkout.
O arredondamento é sempre explícito (round2), nunca implícito nas operações.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

CENTAVOS = Decimal('0.01')

Numero = Union['Money', Decimal, int, float, str]


@dataclass(frozen=True, order=True)
class Money:
    """Valor em moeda única (R$), imutável."""
    amount: Decimal = Decimal('0')

    @classmethod
    def of(cls, valor: Numero) -> 'Money':
        """
        Constrói um Money a partir de Decimal, int, str ou float.
        Floats passam por str() para não herdar a representação binária.
        """
        if isinstance(valor, Money):
            return valor
        if isinstance(valor, float):
            valor = str(valor)
        return cls(Decimal(valor))

    @classmethod
    def zero(cls) -> 'Money':
        return cls(Decimal('0'))

    # --- Aritmética ---

    def __add__(self, other: Numero) -> 'Money':
        return Money(self.amount + Money.of(other).amount)

    def __radd__(self, other: Numero) -> 'Money':
        # Permite sum() começando do inteiro 0
        return self.__add__(other)

    def __sub__(self, other: Numero) -> 'Money':
        return Money(self.amount - Money.of(other).amount)

    def __mul__(self, fator: Union[Decimal, int]) -> 'Money':
        if isinstance(fator, float):
            fator = Decimal(str(fator))
        return Money(self.amount * Decimal(fator))

    __rmul__ = __mul__

    # --- Arredondamento e consultas ---

    def round2(self) -> 'Money':
        """Arredonda para duas casas decimais (meio para cima)."""
        return Money(self.amount.quantize(CENTAVOS, rounding=ROUND_HALF_UP))

    def is_negative(self) -> bool:
        return self.amount < 0

    def clamp_zero(self) -> 'Money':
        """Retorna zero se o valor for negativo."""
        return Money.zero() if self.is_negative() else self

    def __float__(self) -> float:
        return float(self.amount)

    def __str__(self) -> str:
        return str(self.round2().amount)
