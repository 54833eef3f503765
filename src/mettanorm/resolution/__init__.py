from .entity_resolver import EntityResolver, Tense
from .templates import DescriptionTemplates, substitute

__all__ = ["DescriptionTemplates", "EntityResolver", "Tense", "substitute"]
