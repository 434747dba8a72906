"""
Schémas Pydantic pour les comptes bancaires de l'association.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class CompteBancaire(BaseModel):
    """Compte bancaire tel que renvoyé par l'API REST."""
    idcompte: int
    libelle: str = ""
    titulaire: Optional[str] = None
    adressetitulaire: Optional[str] = None
    domiciliation: Optional[str] = None
    adressedomiciliation: Optional[str] = None
    codebanque: Optional[str] = None
    codeguichet: Optional[str] = None
    nrcompte: Optional[str] = None
    clerib: Optional[str] = None
    iban: Optional[str] = None
    swift: Optional[str] = None
    bic: Optional[str] = None


class CompteBancaireCreate(BaseModel):
    """Formulaire de création / modification d'un compte bancaire."""
    libelle: str = Field(..., min_length=2, max_length=100, description="Libellé")
    titulaire: str = Field(..., min_length=2, max_length=100)
    adressetitulaire: str = Field(..., min_length=2, max_length=255)
    domiciliation: str = Field(..., min_length=2, max_length=100)
    adressedomiciliation: str = Field(..., min_length=2, max_length=255)
    codebanque: str = Field(..., min_length=5, max_length=5, description="Code banque")
    codeguichet: str = Field(..., min_length=5, max_length=5, description="Code guichet")
    nrcompte: str = Field(..., min_length=11, max_length=20, description="Numéro de compte")
    clerib: str = Field(..., min_length=2, max_length=2, description="Clé RIB")
    iban: str = Field(..., min_length=27, max_length=34)
    swift: str = Field(..., min_length=8, max_length=11)
    bic: str = Field(..., min_length=8, max_length=11)

    @field_validator("iban")
    @classmethod
    def normalize_iban(cls, v: str) -> str:
        """IBAN en majuscules, sans espaces."""
        cleaned = v.replace(" ", "").upper()
        if len(cleaned) < 27:
            raise ValueError("L'IBAN est invalide")
        return cleaned
