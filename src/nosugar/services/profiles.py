"""Profile, connection and coefficient services."""

import logging
from dataclasses import dataclass
from typing import Protocol

from nosugar.domain.budget import Coefficients
from nosugar.domain.errors import InvalidCoefficientsError
from nosugar.domain.profile import Connections, Profile

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for the profile and data-source toggles."""

    def get_profile(self) -> Profile | None:
        """Return the stored profile, if any."""

    def save_profile(self, profile: Profile) -> None:
        """Replace the stored profile."""

    def get_connections(self) -> Connections | None:
        """Return the stored connection toggles, if any."""

    def save_connections(self, connections: Connections) -> None:
        """Replace the stored connection toggles."""


class CoefficientRepository(Protocol):
    """Persistence interface for the coefficient table."""

    def get_coefficients(self) -> Coefficients | None:
        """Return the stored table, if any."""

    def save_coefficients(self, coefficients: Coefficients) -> None:
        """Replace the stored table."""


@dataclass
class ProfileService:
    """Application service for the single-user profile."""

    repository: ProfileRepository

    def get_profile(self) -> Profile:
        """Return the stored profile or the onboarding defaults."""
        return self.repository.get_profile() or Profile()

    def save_profile(self, profile: Profile) -> Profile:
        """Persist a profile and return it."""
        self.repository.save_profile(profile)
        return profile

    def get_connections(self) -> Connections:
        """Return the stored toggles, all off when unset."""
        return self.repository.get_connections() or Connections()

    def set_connections(self, connections: Connections) -> Connections:
        """Persist connection toggles and return them."""
        self.repository.save_connections(connections)
        return connections

    def reset(self) -> None:
        """Restore the default profile and switch every connection off."""
        self.repository.save_profile(Profile())
        self.repository.save_connections(Connections())


@dataclass
class CoefficientService:
    """Administrative access to the coefficient table."""

    repository: CoefficientRepository

    def get(self) -> Coefficients:
        """Return the stored table or the defaults."""
        return self.repository.get_coefficients() or Coefficients()

    def update(self, changes: dict[str, float]) -> Coefficients:
        """Apply changes to the table in place and persist it."""
        coefficients = self.get()
        candidate = Coefficients(**coefficients.to_dict())
        candidate.update(changes)
        problems = candidate.validate()
        if problems:
            raise InvalidCoefficientsError(problems)
        coefficients.update(changes)
        self.repository.save_coefficients(coefficients)
        _logger.info("Coefficients updated: %s", sorted(changes))
        return coefficients
