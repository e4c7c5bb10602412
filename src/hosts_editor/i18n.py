"""
Messages shown by the hosts command line tool.

Every line the CLI prints to the user has a German and an English text here.
"""

from typing import Optional


# Supported languages
SUPPORTED_LANGUAGES = frozenset({"de", "en"})
DEFAULT_LANGUAGE = "en"


# key -> {language: template}
TRANSLATIONS: dict[str, dict[str, str]] = {
    # Record changes
    "edit.added": {
        "de": "[HINZUGEFÜGT] {host} {address}",
        "en": "[ADDED] {host} {address}",
    },
    "edit.updated": {
        "de": "[AKTUALISIERT] {host} {address}",
        "en": "[UPDATED] {host} {address}",
    },
    "edit.removed": {
        "de": "[ENTFERNT] {host}",
        "en": "[REMOVED] {host}",
    },
    "edit.enabled": {
        "de": "[AKTIVIERT] {host} {address}",
        "en": "[ENABLED] {host} {address}",
    },
    "edit.disabled": {
        "de": "[DEAKTIVIERT] {host} {address}",
        "en": "[DISABLED] {host} {address}",
    },
    "edit.hidden": {
        "de": "[VERSTECKT] {host} {address}",
        "en": "[HIDDEN] {host} {address}",
    },
    "edit.shown": {
        "de": "[SICHTBAR] {host} {address}",
        "en": "[SHOWN] {host} {address}",
    },
    
    # File operations
    "file.formatted": {
        "de": "[OK] Hosts-Datei erfolgreich formatiert",
        "en": "[OK] Hosts file formatted successfully",
    },
    "file.cleaned": {
        "de": "[OK] Hosts-Datei erfolgreich bereinigt",
        "en": "[OK] Hosts file cleaned successfully",
    },
    "file.backed_up": {
        "de": "[OK] Hosts-Datei erfolgreich gesichert",
        "en": "[OK] Hosts file backed up successfully",
    },
    "file.restored": {
        "de": "[OK] Hosts-Datei erfolgreich wiederhergestellt",
        "en": "[OK] Hosts file restored successfully",
    },
    "file.recreated": {
        "de": "[OK] Neue Hosts-Datei erfolgreich erstellt",
        "en": "[OK] New hosts file created successfully",
    },
    "file.path": {
        "de": "Hosts-Datei: {path}",
        "en": "Hosts file: {path}",
    },
    
    # Listing
    "list.mask": {
        "de": "Maske: {mask}",
        "en": "Mask: {mask}",
    },
    "list.counts": {
        "de": "Aktiv: {enabled:<4} Inaktiv: {disabled:<4} Versteckt: {hidden:<4}",
        "en": "Enabled: {enabled:<4} Disabled: {disabled:<4} Hidden: {hidden:<4}",
    },
    
    # Errors
    "error.prefix": {
        "de": "[FEHLER] {message}",
        "en": "[ERROR] {message}",
    },
    "error.host_not_specified": {
        "de": "Host nicht angegeben",
        "en": "Host not specified",
    },
    "error.host_not_found": {
        "de": "Host '{host}' nicht gefunden",
        "en": "Host '{host}' not found",
    },
    "error.invalid_host": {
        "de": "Ungültiger Host '{host}'",
        "en": "Invalid host '{host}'",
    },
    "error.invalid_address": {
        "de": "Ungültige IP '{address}'",
        "en": "Invalid IP '{address}'",
    },
    "error.no_backup": {
        "de": "Sicherungsdatei existiert nicht",
        "en": "Backup file does not exist",
    },
    
    # Configuration
    "config.loaded_from": {
        "de": "Konfiguration aus: {path}",
        "en": "Configuration from: {path}",
    },
    "config.not_found": {
        "de": "Keine Konfiguration gefunden unter: {path}",
        "en": "No configuration found at: {path}",
    },
    "config.exists": {
        "de": "Konfiguration existiert bereits unter: {path}",
        "en": "Configuration already exists at: {path}",
    },
    "config.created": {
        "de": "Konfiguration erstellt unter: {path}",
        "en": "Configuration created at: {path}",
    },
    "config.valid": {
        "de": "Konfiguration unter {path} ist gültig.",
        "en": "Configuration at {path} is valid.",
    },
    "config.load_failed": {
        "de": "Konfiguration konnte nicht geladen werden: {path}",
        "en": "Could not load config from {path}",
    },
}


def get_message(
    key: str,
    language: Optional[str] = None,
    **kwargs,
) -> str:
    """
    Look up and format a message.

    Unknown languages fall back to English. An unknown key is returned as
    is, and a template whose placeholders are not all supplied is returned
    unformatted.

    Args:
        key: Catalogue key such as "edit.added"
        language: 'de' or 'en'
        **kwargs: Placeholder values
    """
    if language not in SUPPORTED_LANGUAGES:
        language = DEFAULT_LANGUAGE

    entry = TRANSLATIONS.get(key)
    if not entry:
        return key

    template = entry.get(language) or entry.get(DEFAULT_LANGUAGE)
    if template is None:
        return key

    if not kwargs:
        return template
    try:
        return template.format(**kwargs)
    except KeyError:
        return template


def get_all_message_keys() -> set[str]:
    return set(TRANSLATIONS)


def get_missing_translations(language: str) -> set[str]:
    """Keys that have no text in language."""
    return {key for key, entry in TRANSLATIONS.items() if language not in entry}


def validate_translations() -> dict[str, set[str]]:
    """
    Check the catalogue for gaps.

    Returns:
        Missing keys per supported language; all sets are empty when the
        catalogue is complete
    """
    return {language: get_missing_translations(language) for language in SUPPORTED_LANGUAGES}
