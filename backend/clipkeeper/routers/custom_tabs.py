"""Custom tabs router for organizing links into user-defined folders."""

from typing import Annotated, List
from fastapi import APIRouter, Depends, HTTPException, status

from clipkeeper.dependencies import get_current_user, get_repository
from clipkeeper.logger import api_logger
from clipkeeper.models.custom_tab import CustomTab
from clipkeeper.models.user import User
from clipkeeper.repository import LinkRepository
from clipkeeper.routers.links import get_owned_link
from clipkeeper.schemas.custom_tab import CustomTabCreate, CustomTabResponse
from clipkeeper.schemas.link import LinkResponse

router = APIRouter(prefix="/custom-tabs")


def get_owned_tab(repository: LinkRepository, tab_id: int, user: User) -> CustomTab:
    tab = repository.get_custom_tab_by_id(tab_id)

    if not tab:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Custom tab not found"
        )

    if tab.user_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unauthorized access to this tab",
        )

    return tab


@router.post("/", response_model=CustomTabResponse, status_code=status.HTTP_201_CREATED)
async def create_custom_tab(
    payload: CustomTabCreate,
    repository: Annotated[LinkRepository, Depends(get_repository)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Create a custom tab (icon defaults to "folder")."""
    tab = repository.create_custom_tab(
        user_id=current_user.id,
        name=payload.name.strip(),
        icon=payload.icon or "folder",
        description=payload.description or "",
    )
    repository.commit()

    return tab


@router.get("/", response_model=List[CustomTabResponse])
async def get_custom_tabs(
    repository: Annotated[LinkRepository, Depends(get_repository)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get all custom tabs of the current user."""
    return repository.get_custom_tabs_by_user_id(current_user.id)


@router.get("/{tab_id}", response_model=CustomTabResponse)
async def get_custom_tab(
    tab_id: int,
    repository: Annotated[LinkRepository, Depends(get_repository)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get a specific custom tab by ID."""
    return get_owned_tab(repository, tab_id, current_user)


@router.delete("/{tab_id}")
async def delete_custom_tab(
    tab_id: int,
    repository: Annotated[LinkRepository, Depends(get_repository)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Delete a custom tab. Links inside it are kept."""
    get_owned_tab(repository, tab_id, current_user)

    repository.delete_custom_tab(tab_id, current_user.id)
    repository.commit()

    return {"message": "Custom tab deleted successfully"}


@router.post("/{tab_id}/links/{link_id}")
async def add_link_to_tab(
    tab_id: int,
    link_id: int,
    repository: Annotated[LinkRepository, Depends(get_repository)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Add one of the user's links to one of their tabs."""
    get_owned_tab(repository, tab_id, current_user)
    get_owned_link(repository, link_id, current_user)

    repository.add_link_to_tab(link_id, tab_id)
    repository.commit()
    api_logger.debug(f"Added link {link_id} to tab {tab_id}")

    return {"message": "Link added to tab successfully"}


@router.delete("/{tab_id}/links/{link_id}")
async def remove_link_from_tab(
    tab_id: int,
    link_id: int,
    repository: Annotated[LinkRepository, Depends(get_repository)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Remove a link from a tab."""
    get_owned_tab(repository, tab_id, current_user)
    get_owned_link(repository, link_id, current_user)

    repository.remove_link_from_tab(link_id, tab_id)
    repository.commit()

    return {"message": "Link removed from tab successfully"}


@router.get("/{tab_id}/links", response_model=List[LinkResponse])
async def get_tab_links(
    tab_id: int,
    repository: Annotated[LinkRepository, Depends(get_repository)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get the links inside a tab, most recently added first."""
    get_owned_tab(repository, tab_id, current_user)
    return repository.get_links_by_tab_id(tab_id)
