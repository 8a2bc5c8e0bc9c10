"""
hotel_california.localization.catalog

Immutable message catalog and per-request translator.

Responsibilities:
- Load YAML message files (one per language) once at startup.
- Negotiate the caller's `Accept-Language` header into a lookup chain.
- Resolve message keys with fallback: requested languages -> default language
  -> literal default text.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from hotel_california.errors import APIError

DEFAULT_MESSAGES_DIR = Path(__file__).parent / "messages"

_CATALOG_SUFFIXES = (".yaml", ".yml")


class CatalogError(Exception):
    pass


@dataclass(frozen=True, slots=True)
class MessageCatalog:
    default_language: str
    messages: Mapping[str, Mapping[str, str]]

    @classmethod
    def load(cls, directory: Path | None = None, *, default_language: str) -> MessageCatalog:
        directory = directory or DEFAULT_MESSAGES_DIR
        if not directory.is_dir():
            raise CatalogError(f"language files directory not found: {directory}")

        messages: dict[str, Mapping[str, str]] = {}
        for path in sorted(directory.iterdir()):
            if path.is_dir() or path.suffix not in _CATALOG_SUFFIXES:
                continue
            messages[normalize_language(path.stem)] = MappingProxyType(_read_message_file(path))

        return cls(
            default_language=normalize_language(default_language),
            messages=MappingProxyType(messages),
        )

    @property
    def languages(self) -> frozenset[str]:
        return frozenset(self.messages)

    def lookup(self, language: str, key: str) -> str | None:
        bucket = self.messages.get(language)
        if bucket is None:
            return None
        return bucket.get(key)

    def translator(self, accept_language: str | None) -> Translator:
        chain: list[str] = []
        for tag in parse_accept_language(accept_language):
            for candidate in (tag, tag.split("-", 1)[0]):
                if candidate not in chain:
                    chain.append(candidate)
        if self.default_language not in chain:
            chain.append(self.default_language)
        return Translator(catalog=self, languages=tuple(chain))


@dataclass(frozen=True, slots=True)
class Translator:
    """
    Request-scoped view of the catalog; passed explicitly through the pipeline.
    """

    catalog: MessageCatalog
    languages: tuple[str, ...]

    def localize(
        self, key: str | None, default: str, params: Mapping[str, Any] | None = None
    ) -> str:
        if not key:
            return default
        for language in self.languages:
            template = self.catalog.lookup(language, key)
            if template is not None:
                return _render(template, params or {})
        return default

    def localize_error(self, err: APIError) -> APIError:
        err.message = self.localize(err.message_key, err.message, err.params)
        return err


def normalize_language(tag: str) -> str:
    return tag.strip().replace("_", "-").lower()


def parse_accept_language(header: str | None) -> list[str]:
    """
    Return language tags ordered by descending quality (stable for ties).

    Malformed entries are skipped; `*` carries no language and is ignored.
    """

    if not header:
        return []

    weighted: list[tuple[float, int, str]] = []
    for index, part in enumerate(header.split(",")):
        tag, _, params = part.partition(";")
        tag = normalize_language(tag)
        if not tag or tag == "*":
            continue
        quality = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                quality = float(params[2:])
            except ValueError:
                continue
        if quality <= 0:
            continue
        weighted.append((-quality, index, tag))

    return [tag for _, _, tag in sorted(weighted)]


def _read_message_file(path: Path) -> dict[str, str]:
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise CatalogError(f"loading language file {path.name} failed, {e}") from e
    if not isinstance(raw, dict):
        raise CatalogError(f"language file {path.name} must contain a mapping")
    return {str(k): str(v) for k, v in raw.items()}


def _render(template: str, params: Mapping[str, Any]) -> str:
    if not params:
        return template
    try:
        return template.format(**params)
    except (KeyError, IndexError, ValueError):
        return template


# --- Module Notes -----------------------------------------------------------
# The catalog is built once in the app lifespan and never mutated; concurrent
# requests only read it.
