"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from nosugar.adapters.supabase_activity_repository import SupabaseActivityRepository
from nosugar.adapters.supabase_coefficient_repository import (
    SupabaseCoefficientRepository,
)
from nosugar.adapters.supabase_ledger_repository import SupabaseLedgerRepository
from nosugar.adapters.supabase_profile_repository import SupabaseProfileRepository
from nosugar.config import Settings
from nosugar.services.activity import ActivityBonusService
from nosugar.services.ledger import LedgerService
from nosugar.services.overview import BudgetService
from nosugar.services.profiles import CoefficientService, ProfileService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    coefficient_service: CoefficientService
    ledger_service: LedgerService
    activity_service: ActivityBonusService
    budget_service: BudgetService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    key = resolved_settings.profile_key
    timezone = resolved_settings.timezone
    profile_service = ProfileService(SupabaseProfileRepository(supabase_client, key))
    coefficient_service = CoefficientService(
        SupabaseCoefficientRepository(supabase_client, key)
    )
    ledger_service = LedgerService(
        SupabaseLedgerRepository(supabase_client, key), timezone_name=timezone
    )
    activity_service = ActivityBonusService(
        SupabaseActivityRepository(supabase_client, key), timezone_name=timezone
    )
    budget_service = BudgetService(
        profile_service=profile_service,
        coefficient_service=coefficient_service,
        activity_service=activity_service,
        ledger_service=ledger_service,
        timezone_name=timezone,
    )
    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        coefficient_service=coefficient_service,
        ledger_service=ledger_service,
        activity_service=activity_service,
        budget_service=budget_service,
    )
