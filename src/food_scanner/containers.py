"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from food_scanner.adapters.json_file_storage import JsonFileStorage
from food_scanner.adapters.supabase_food_repository import SupabaseFoodRepository
from food_scanner.config import Settings
from food_scanner.services.favorites import FavoritesService
from food_scanner.services.notices import NoticeBoard
from food_scanner.services.recent_searches import RecentSearchesService
from food_scanner.services.search import SearchService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    notices: NoticeBoard
    recent_searches_service: RecentSearchesService
    favorites_service: FavoritesService
    search_service: SearchService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_anon_key
    )
    food_repository = SupabaseFoodRepository(supabase_client)
    storage = JsonFileStorage.create(resolved_settings.storage_dir)
    notices = NoticeBoard()
    recent_searches_service = RecentSearchesService(
        storage=storage,
        notices=notices,
        limit=resolved_settings.recent_searches_limit,
    )
    favorites_service = FavoritesService(storage=storage, notices=notices)
    search_service = SearchService(
        repository=food_repository,
        recent_searches=recent_searches_service,
        notices=notices,
        limit=resolved_settings.search_limit,
        min_length=resolved_settings.search_min_length,
        debounce_seconds=resolved_settings.search_debounce_seconds,
    )
    return AppContainer(
        settings=resolved_settings,
        notices=notices,
        recent_searches_service=recent_searches_service,
        favorites_service=favorites_service,
        search_service=search_service,
    )
