"""Visitor location resolution.

Maps a raw client IP to a LocationEntity. Every failure path (blank or
malformed input, local addresses, provider outages) resolves to the
default location, so callers never see an exception.
"""

import asyncio
import logging
import random
from collections.abc import Callable, Sequence

from visitor_greeting.config import settings
from visitor_greeting.entities import DEFAULT_LOCATION, LocationEntity
from visitor_greeting.protocols import CacheStore, LocationProvider
from visitor_greeting.utils import LogOnce, is_local_address, normalize_ip, parse_ip

logger = logging.getLogger(__name__)


class LocationResolver:
    """Resolve IP addresses through an ordered chain of providers.

    Providers are tried in order until one returns a location. Each
    attempt is cancelled after ``provider_timeout`` seconds. Results are
    cached with a jittered TTL so entries written together do not all
    expire together.
    """

    def __init__(
        self,
        cache: CacheStore,
        providers: Sequence[LocationProvider],
        log_once: LogOnce | None = None,
        default_location: LocationEntity = DEFAULT_LOCATION,
        ttl: float | None = None,
        ttl_jitter: float | None = None,
        provider_timeout: float | None = None,
        development_mode: bool | None = None,
        rand: Callable[[], float] = random.random,
    ) -> None:
        """Initialize the resolver.

        Args:
            cache: Shared cache store.
            providers: Providers in priority order.
            log_once: Deduplicating logger. Defaults to a private instance.
            default_location: Location returned on every failure path.
            ttl: Base cache TTL in seconds. Defaults to settings.
            ttl_jitter: Fractional TTL jitter, 0.1 means ±10%. Defaults to settings.
            provider_timeout: Per-provider timeout in seconds. Defaults to settings.
            development_mode: Skip providers entirely. Defaults to settings.
            rand: Source of uniform floats in [0, 1), injectable for tests.
        """
        self._cache = cache
        self._providers = list(providers)
        self._log_once = log_once or LogOnce(logger)
        self._default = default_location
        self._ttl = ttl or settings.location_cache_ttl
        self._jitter = settings.location_ttl_jitter if ttl_jitter is None else ttl_jitter
        self._timeout = provider_timeout or settings.location_provider_timeout
        self._development = settings.is_development if development_mode is None else development_mode
        self._rand = rand

    @property
    def default_location(self) -> LocationEntity:
        return self._default

    @property
    def providers(self) -> list[LocationProvider]:
        return list(self._providers)

    async def resolve(self, raw_ip: str | None) -> LocationEntity:
        """Resolve a raw client IP to a location.

        Args:
            raw_ip: IP as received from proxy headers, possibly bracketed
                or carrying a zone index

        Returns:
            The provider location, or the default location on any failure
        """
        if raw_ip is None or not raw_ip.strip():
            self._log_once.warning("No client IP supplied, using default location", key="missing-ip")
            return self._default

        ip = normalize_ip(raw_ip)
        address = parse_ip(ip)
        if address is None:
            self._log_once.warning(
                f"Invalid IP address format {ip!r}, using default location", key="invalid-ip"
            )
            return self._default

        if is_local_address(address):
            logger.debug("Local address %s, using default location", ip)
            return self._default

        if self._development:
            logger.debug("Development mode, using default location for %s", ip)
            return self._default

        cache_key = f"location:{ip}"
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        location = await self._lookup(ip)
        if location is None:
            self._log_once.warning(
                "All location providers failed, using default location", key="location-all-failed"
            )
            location = self._default

        self._cache.set(cache_key, location, self._jittered_ttl())
        return location

    async def _lookup(self, ip: str) -> LocationEntity | None:
        for provider in self._providers:
            try:
                return await asyncio.wait_for(provider.lookup(ip), timeout=self._timeout)
            except asyncio.TimeoutError:
                self._log_once.warning(
                    f"Location provider {provider.name} timed out after {self._timeout}s",
                    key=f"location-timeout:{provider.name}",
                )
            except Exception as e:
                self._log_once.warning(
                    f"Location provider {provider.name} failed: {e}",
                    key=f"location-error:{provider.name}",
                )
        return None

    def _jittered_ttl(self) -> float:
        return self._ttl * (1 - self._jitter + self._rand() * 2 * self._jitter)
