"""Graph resolution engine turning shallow sections into compiled sections."""

from .classifier import ReferenceClassifier
from .metadata import MetadataIndex, MetadataRecord, derive_textual_attrs
from .relations import RelationshipAccumulator
from .section import (
    Embed,
    EmbeddedSection,
    EmbedOption,
    LocalLink,
    Plain,
    Section,
    ShallowSection,
)
from .state import CompileError, CompileState, MissingTarget
from .taxon import TaxonomyRules

__all__ = [
    "CompileError",
    "CompileState",
    "Embed",
    "EmbedOption",
    "EmbeddedSection",
    "LocalLink",
    "MetadataIndex",
    "MetadataRecord",
    "MissingTarget",
    "Plain",
    "ReferenceClassifier",
    "RelationshipAccumulator",
    "Section",
    "ShallowSection",
    "TaxonomyRules",
    "derive_textual_attrs",
]
