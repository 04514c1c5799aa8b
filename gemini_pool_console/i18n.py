"""Localization runtime.

Holds the active language, looks up display strings, formats numbers and
dates for that language, and tells subscribers when the language changes so
they can re-render.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, tzinfo
from decimal import ROUND_HALF_UP, Decimal

import structlog

from gemini_pool_console.catalog import CATALOG, DEFAULT_LANGUAGE, LANGUAGE_LABELS
from gemini_pool_console.storage import LANGUAGE_KEY, KeyValueStore, MemoryStore

logger = structlog.get_logger()

LanguageListener = Callable[[str], None]

_ONE_DECIMAL = Decimal("0.1")


@dataclass(frozen=True)
class LanguageOption:
    """One entry of the language switcher."""

    code: str
    label: str
    title: str
    active: bool


def _one_decimal(value: int | float, divisor: int) -> str:
    # Rounds the exact binary value of the float quotient; exact ties go up.
    quotient = Decimal(value / divisor)
    return str(quotient.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def _plain_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class LocalizationRuntime:
    """Active language, string lookup and locale-aware formatting.

    Usage:
        i18n = LocalizationRuntime(store)
        unsubscribe = i18n.subscribe(lambda lang: view.rerender())
        i18n.switch_language("en")
        i18n.t("active")  # "Active"
    """

    def __init__(
        self,
        store: KeyValueStore | None = None,
        *,
        default_language: str = DEFAULT_LANGUAGE,
        catalog: dict[str, dict[str, str]] | None = None,
        tz: tzinfo | None = None,
    ) -> None:
        """Initialize the runtime.

        Args:
            store: Persisted state holding the language preference
            default_language: Used when no supported preference is stored
            catalog: Language code to string table mapping
            tz: Timezone for format_date; None means the local timezone
        """
        self._store = store if store is not None else MemoryStore()
        self._catalog = catalog if catalog is not None else CATALOG
        self._tz = tz
        self._listeners: list[LanguageListener] = []
        self._log = logger.bind(service="i18n")

        stored = self._store.get(LANGUAGE_KEY)
        if stored in self._catalog:
            self._language = stored
        elif default_language in self._catalog:
            self._language = default_language
        else:
            self._language = next(iter(self._catalog))

    @property
    def language(self) -> str:
        return self._language

    @property
    def supported_languages(self) -> tuple[str, ...]:
        return tuple(self._catalog)

    def translate(self, key: str, fallback: str | None = None) -> str:
        """Return the display string for key in the active language.

        Missing or empty entries fall back to ``fallback`` when given,
        otherwise to the key itself.
        """
        table = self._catalog.get(self._language) or {}
        value = table.get(key)
        if value:
            return value
        return fallback or key

    t = translate

    def switch_language(self, language: str) -> bool:
        """Activate a language, persist it and notify subscribers.

        Unsupported languages are ignored.

        Returns:
            True if the language was switched
        """
        if language not in self._catalog:
            self._log.debug("i18n.unsupported_language", language=language)
            return False

        self._language = language
        self._store.set(LANGUAGE_KEY, language)
        self._log.info("i18n.language_switched", language=language)
        self._notify()
        return True

    def subscribe(self, listener: LanguageListener) -> Callable[[], None]:
        """Register a language-change listener.

        Returns:
            Callable removing the listener
        """
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: LanguageListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._language)
            except Exception as e:
                self._log.exception("i18n.listener_failed", error=str(e))

    def language_options(self) -> list[LanguageOption]:
        """Language switcher entries, with the active one flagged."""
        options = []
        for code in self._catalog:
            label, title = LANGUAGE_LABELS.get(code, (code.upper(), code))
            options.append(
                LanguageOption(
                    code=code,
                    label=label,
                    title=title,
                    active=code == self._language,
                )
            )
        return options

    def format_number(self, value: int | float | None) -> str:
        """Abbreviate a counter for display.

        zh uses 万 (10^4) and 千 (10^3); other languages use M and K.
        """
        if value is None:
            return "0"

        if self._language == "zh":
            if value >= 10000:
                return _one_decimal(value, 10000) + "万"
            if value >= 1000:
                return _one_decimal(value, 1000) + "千"
        else:
            if value >= 1000000:
                return _one_decimal(value, 1000000) + "M"
            if value >= 1000:
                return _one_decimal(value, 1000) + "K"
        return _plain_number(value)

    def format_date(self, value: str) -> str:
        """Render an ISO-8601 timestamp as date and time for the active language."""
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except (AttributeError, ValueError):
            return value

        if parsed.tzinfo is None:
            # Naive timestamps are taken to be in the display timezone already.
            local = parsed
        else:
            local = parsed.astimezone(self._tz)

        if self._language == "zh":
            return (
                f"{local.year}/{local.month}/{local.day} "
                f"{local.hour:02d}:{local.minute:02d}:{local.second:02d}"
            )

        hour = local.hour % 12 or 12
        meridiem = "AM" if local.hour < 12 else "PM"
        return (
            f"{local.month}/{local.day}/{local.year} "
            f"{hour}:{local.minute:02d}:{local.second:02d} {meridiem}"
        )
