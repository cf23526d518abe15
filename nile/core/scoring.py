from __future__ import annotations

from dataclasses import dataclass


def _div_toward_zero(value: int, divisor: int) -> int:
    quotient = abs(value) // abs(divisor)
    return quotient if (value >= 0) == (divisor > 0) else -quotient


@dataclass(frozen=True)
class TurnScore:
    """Skore tahu s oddelenymi plusovymi a minusovymi bodmi.

    Rovnako ako na papierovych hracich hárkoch drzime bonusy (`add`) a
    penalizacie (`sub`) zvlast. Bezne plati `add >= 0` a `sub <= 0`; opacne
    znamienka vznikaju len pri vratení akcie (napr. odobratie dlazdice),
    takze spocitanie akcie a jej negacie da presne nulu.
    """

    add: int = 0
    sub: int = 0

    @classmethod
    def from_int(cls, value: int) -> TurnScore:
        if value >= 0:
            return cls(add=value, sub=0)
        return cls(add=0, sub=value)

    def score(self) -> int:
        return self.add + self.sub

    def __add__(self, other: TurnScore) -> TurnScore:
        return TurnScore(self.add + other.add, self.sub + other.sub)

    def __sub__(self, other: TurnScore) -> TurnScore:
        return TurnScore(self.add - other.add, self.sub - other.sub)

    def __neg__(self) -> TurnScore:
        return TurnScore(-self.add, -self.sub)

    def __mul__(self, factor: int) -> TurnScore:
        return TurnScore(self.add * factor, self.sub * factor)

    def __truediv__(self, divisor: int) -> TurnScore:
        # Delenie po zlozkach, zaokruhlene k nule
        return TurnScore(
            _div_toward_zero(self.add, divisor),
            _div_toward_zero(self.sub, divisor),
        )

    def __lt__(self, other: TurnScore) -> bool:
        return self.score() < other.score()

    def __le__(self, other: TurnScore) -> bool:
        return self.score() <= other.score()

    def __gt__(self, other: TurnScore) -> bool:
        return self.score() > other.score()

    def __ge__(self, other: TurnScore) -> bool:
        return self.score() >= other.score()
