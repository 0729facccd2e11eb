"""Erreurs du domaine astrologique.

Toutes dérivent de `ValueError`: une entrée invalide est une erreur de l'appelant, jamais une
condition rattrapée silencieusement par le moteur.
"""

from __future__ import annotations


class AstroInputError(ValueError):
    """Entrée invalide pour un calcul astronomique."""


class InvalidBirthDataError(AstroInputError):
    """Données de naissance mal formées ou hors bornes."""

    def __init__(self, field: str, value: object, reason: str) -> None:
        """Construit le message à partir du champ fautif et de la raison."""
        super().__init__(f"invalid {field} {value!r}: {reason}")
        self.field = field
        self.value = value
        self.reason = reason


class UnknownBodyError(AstroInputError):
    """Identifiant de corps céleste non reconnu."""

    def __init__(self, body: object) -> None:
        """Construit le message avec l'identifiant rejeté."""
        super().__init__(f"unknown body: {body!r}")
        self.body = body
