"""
Entity resolver: internal ``soa_...`` identifiers to human-readable text.

Lookup order for every resolution is table first, derived fallback second.
Tables are built once from the defaults below plus an optional
``InferenceConfig`` and are read-only afterwards, so one resolver can be
shared by concurrent analyses.

Negation algebra
----------------
Eventuality names carry an ``n`` after ``soa_e`` when negated:
``soa_emam`` (moors) / ``soa_enmam`` (does not moor).
- ``is_negated_entity``: starts with ``soa_en``
- ``get_negated_form``: ``soa_e...`` -> ``soa_en...``; other ids get ``not_``
- ``get_base_form``: inverse of the ``n`` insertion
"""

from __future__ import annotations

from typing import Optional

from ..config import ActionForms, InferenceConfig

SOA_PREFIX = "soa_"
EVENTUALITY_PREFIX = "soa_e"
NEGATED_PREFIX = "soa_en"
PORT_PREFIX = "spt"


class Tense:
    PRESENT = "present"
    PAST = "past"
    BASE = "base"


def _forms(base: str, present: str, past: str) -> ActionForms:
    return ActionForms(base=base, present=present, past=past)


class EntityResolver:
    """
    Resolve identifiers to display names, verb forms and instruments.
    """

    DEFAULT_SPECIAL_CHARACTERS: dict[str, str] = {
        "MAERSK": "MÆRSK",
        "AERSK": "ÆRSK",
    }

    DEFAULT_ENTITY_NAMES: dict[str, str] = {
        "soa_ALEXANDRA_MAERSK": "ALEXANDRA MÆRSK",
        "soa_LAURA_MAERSK": "LAURA MÆRSK",
        "soa_MICT": "MICT Smart Port",
        "soa_sptMICT": "MICT Smart Port Treasury",
        # eventualities whose agent is ALEXANDRA MÆRSK
        "soa_emam": "ALEXANDRA MÆRSK",
        "soa_enmam": "ALEXANDRA MÆRSK",
        "soa_eplm": "ALEXANDRA MÆRSK",
        "soa_enplm": "ALEXANDRA MÆRSK",
        "soa_elam": "ALEXANDRA MÆRSK",
        "soa_enlam": "ALEXANDRA MÆRSK",
        "soa_epam": "ALEXANDRA MÆRSK",
        "soa_enpam": "ALEXANDRA MÆRSK",
    }

    DEFAULT_INSTRUMENTS: dict[str, str] = {
        "soa_USDS": "USDS",
        "soa_INRS": "INRS",
        "soa_USD": "USD",
        "soa_EUR": "EUR",
    }

    DEFAULT_ACTIONS: dict[str, ActionForms] = {
        "soaMoor": _forms("moor", "moors", "moored"),
        "soaPay": _forms("pay", "pays", "paid"),
        "soaLeave": _forms("leave", "leaves", "left"),
        "soaArrive": _forms("arrive", "arrives", "arrived"),
        "soaDock": _forms("dock", "docks", "docked"),
        "soaDeliver": _forms("deliver", "delivers", "delivered"),
        "soaLoad": _forms("load", "loads", "loaded"),
        "soaUnload": _forms("unload", "unloads", "unloaded"),
        "soa_emam": _forms("moor", "moors", "moored"),
        "soa_enmam": _forms("moor", "moors", "moored"),
        "soa_eplm": _forms("pay", "pays", "paid"),
        "soa_enplm": _forms("pay", "pays", "paid"),
        "soa_elam": _forms("leave", "leaves", "left"),
        "soa_enlam": _forms("leave", "leaves", "left"),
        "soa_epam": _forms("pay", "pays", "paid"),
        "soa_enpam": _forms("pay", "pays", "paid"),
    }

    def __init__(self, config: Optional[InferenceConfig] = None):
        config = config or InferenceConfig()
        self._entity_names = {**self.DEFAULT_ENTITY_NAMES, **config.entity_mappings}
        self._special_characters = {
            **self.DEFAULT_SPECIAL_CHARACTERS,
            **config.special_characters,
        }
        self._instruments = {**self.DEFAULT_INSTRUMENTS, **config.instrument_mappings}
        self._actions = {**self.DEFAULT_ACTIONS, **config.action_mappings}

    def resolve_entity(self, entity_id: str) -> str:
        if entity_id in self._entity_names:
            return self._entity_names[entity_id]

        if not entity_id.startswith(SOA_PREFIX):
            return entity_id

        name = entity_id[len(SOA_PREFIX):].replace("_", " ")
        # Applied in table order; later entries see earlier replacements
        for pattern, replacement in self._special_characters.items():
            name = name.replace(pattern, replacement)
        return name

    def resolve_action(self, action_id: str, tense: str = Tense.PRESENT) -> str:
        forms = self._actions.get(action_id)
        if forms is not None:
            if tense == Tense.PRESENT:
                return forms.present
            if tense == Tense.PAST:
                return forms.past
            return forms.base

        if action_id.startswith("soa") and len(action_id) > 3:
            base = action_id[3].lower() + action_id[4:]
            return base + "s" if tense == Tense.PRESENT else base
        return action_id

    def has_action(self, action_id: str) -> bool:
        return action_id in self._actions

    def resolve_instrument(self, instrument_id: str) -> str:
        if instrument_id in self._instruments:
            return self._instruments[instrument_id]
        if instrument_id.startswith(SOA_PREFIX):
            return instrument_id[len(SOA_PREFIX):]
        return instrument_id

    def resolve_port(self, port_id: str) -> str:
        if port_id in self._entity_names:
            return self._entity_names[port_id]
        name = port_id[len(SOA_PREFIX):] if port_id.startswith(SOA_PREFIX) else port_id
        if name.startswith(PORT_PREFIX):
            name = name[len(PORT_PREFIX):]
        return f"{name} Smart Port"

    @staticmethod
    def is_negated_entity(entity_id: str) -> bool:
        return entity_id.startswith(NEGATED_PREFIX)

    @staticmethod
    def get_negated_form(entity_id: str) -> str:
        if entity_id.startswith(NEGATED_PREFIX):
            return entity_id
        if entity_id.startswith(EVENTUALITY_PREFIX):
            return NEGATED_PREFIX + entity_id[len(EVENTUALITY_PREFIX):]
        return "not_" + entity_id

    @staticmethod
    def get_base_form(entity_id: str) -> str:
        if entity_id.startswith(NEGATED_PREFIX):
            return EVENTUALITY_PREFIX + entity_id[len(NEGATED_PREFIX):]
        return entity_id
