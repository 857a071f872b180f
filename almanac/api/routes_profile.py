"""
Routes de persistance des profils utilisateur (`/profiles/{profile_id}`).
"""

from fastapi import APIRouter, Response

from almanac.core.container import container
from almanac.core.http_constants import HTTP_NO_CONTENT
from almanac.domain.entities import UserProfile

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.put("/{profile_id}", response_model=UserProfile)
def put_profile(profile_id: str, profile: UserProfile):
    """Crée ou remplace un profil après validation (422 si incohérent)."""
    return container.fortune_service.save_profile(profile_id, profile)


@router.get("/{profile_id}", response_model=UserProfile)
def get_profile(profile_id: str):
    return container.fortune_service.get_profile(profile_id)


@router.delete("/{profile_id}", status_code=HTTP_NO_CONTENT)
def delete_profile(profile_id: str):
    container.fortune_service.delete_profile(profile_id)
    return Response(status_code=HTTP_NO_CONTENT)
