"""
Routes de gestion des opérateurs de la console (administrateurs uniquement).
"""

from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy import or_
from sqlalchemy.orm import Session

from alnour.database import get_db
from alnour.core.logging import logger
from alnour.core.security import get_password_hash
from alnour.models.operator import Operator, OperatorRole
from alnour.schemas.operator import OperatorCreate, OperatorUpdate, OperatorResponse
from alnour.api.deps import require_admin


router = APIRouter()


@router.get(
    "/",
    response_model=List[OperatorResponse],
    summary="Liste des opérateurs",
)
async def list_operators(
    skip: int = Query(0, ge=0, description="Nombre d'éléments à sauter"),
    limit: int = Query(50, ge=1, le=100, description="Nombre max d'éléments"),
    search: Optional[str] = Query(None, description="Recherche par nom/email"),
    role: Optional[OperatorRole] = Query(None, description="Filtrer par rôle"),
    is_active: Optional[bool] = Query(None, description="Filtrer par statut actif"),
    db: Session = Depends(get_db),
    current_operator: Operator = Depends(require_admin),
) -> Any:
    logger.info(f"Liste des opérateurs demandée par {current_operator.email}")

    query = db.query(Operator)

    if search:
        search_term = f"%{search}%"
        query = query.filter(
            or_(
                Operator.first_name.ilike(search_term),
                Operator.last_name.ilike(search_term),
                Operator.email.ilike(search_term),
            )
        )

    if role:
        query = query.filter(Operator.role == role.value)

    if is_active is not None:
        query = query.filter(Operator.is_active == is_active)

    return query.order_by(Operator.created_at.desc()).offset(skip).limit(limit).all()


@router.post(
    "/",
    response_model=OperatorResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Créer un opérateur",
)
async def create_operator(
    operator_data: OperatorCreate,
    db: Session = Depends(get_db),
    current_operator: Operator = Depends(require_admin),
) -> Any:
    """
    Crée un compte opérateur.

    - **email**: Adresse email unique
    - **password**: Mot de passe (min 6 caractères)
    - **role**: admin, gestionnaire ou lecteur
    """
    existing = db.query(Operator).filter(Operator.email == operator_data.email).first()
    if existing:
        logger.warning(f"Email déjà utilisé: {operator_data.email}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Un opérateur existe déjà avec cet email",
        )

    operator = Operator(
        email=operator_data.email,
        hashed_password=get_password_hash(operator_data.password),
        first_name=operator_data.first_name,
        last_name=operator_data.last_name,
        role=operator_data.role.value,
        is_active=True,
    )
    db.add(operator)
    db.commit()
    db.refresh(operator)

    logger.info(
        f"Opérateur créé: {operator.email} ({operator.role}) par {current_operator.email}"
    )
    return operator


@router.put(
    "/{operator_id}",
    response_model=OperatorResponse,
    summary="Modifier un opérateur",
)
async def update_operator(
    operator_id: int,
    operator_data: OperatorUpdate,
    db: Session = Depends(get_db),
    current_operator: Operator = Depends(require_admin),
) -> Any:
    """Modifie l'identité, le rôle ou le statut d'un opérateur."""
    operator = db.query(Operator).filter(Operator.id == operator_id).first()
    if not operator:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Opérateur non trouvé",
        )

    # Les colonnes sont obligatoires: un champ envoyé à null est ignoré
    update_data = operator_data.model_dump(exclude_unset=True, exclude_none=True)

    # Un administrateur ne peut pas se retirer ses propres droits
    if operator.id == current_operator.id and (
        update_data.get("is_active") is False
        or update_data.get("role") not in (None, OperatorRole.ADMIN)
    ):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Vous ne pouvez pas désactiver ou rétrograder votre propre compte",
        )

    for field, value in update_data.items():
        if field == "role":
            value = OperatorRole(value).value
        setattr(operator, field, value)

    db.commit()
    db.refresh(operator)

    logger.info(f"Opérateur {operator.email} modifié par {current_operator.email}")
    return operator
