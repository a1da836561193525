"""
Benford Document Processor

Takes a document as raw bytes, typically the text output of a document
extractor, and routes it by Benford's Law conformance. The content passes
through untouched; only a relationship is attached.

Relationships:
- THREE_WAY mode: CONFORMING, NON_CONFORMING, INSUFFICIENT_SAMPLE
- TWO_WAY mode: NOT_SUSPECT, SUSPECT (INSUFFICIENT_SAMPLE only for empty samples)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
import re

from config import ClassifierConfig, RoutingMode
from console import logger
from detectors import (
    BenfordAssessment,
    BenfordClassifier,
    Classification,
    Histogram,
    extract_leading_digit_histogram,
)


class Relationship(Enum):
    """Outbound routes for a processed document."""
    CONFORMING = "Conforming relationship"
    NON_CONFORMING = "Non-conforming relationship"
    NOT_SUSPECT = "Not suspect relationship"
    SUSPECT = "Suspect relationship"
    INSUFFICIENT_SAMPLE = "Insufficient numerical values to run a Chi-squared test"

    @property
    def description(self) -> str:
        return self.value


@dataclass(frozen=True)
class PropertyDescriptor:
    name: str
    description: str
    default: str
    required: bool = True


ALPHA = PropertyDescriptor(
    name="alpha",
    description="Significance level at which documents will be classified as conforming or non-conforming.",
    default="0.05",
)

MIN_SAMPLE = PropertyDescriptor(
    name="min-sample",
    description="Minimum number of numerical values to perform a Chi-squared test.",
    default="5",
)

PROPERTY_DESCRIPTORS = {
    RoutingMode.THREE_WAY: (ALPHA, MIN_SAMPLE),
    RoutingMode.TWO_WAY: (ALPHA,),
}

ROUTES = {
    RoutingMode.THREE_WAY: {
        Classification.CONFORMING_SUFFICIENT_SAMPLE: Relationship.CONFORMING,
        Classification.NON_CONFORMING_SUFFICIENT_SAMPLE: Relationship.NON_CONFORMING,
        Classification.INSUFFICIENT_SAMPLE: Relationship.INSUFFICIENT_SAMPLE,
    },
    RoutingMode.TWO_WAY: {
        Classification.CONFORMING_SUFFICIENT_SAMPLE: Relationship.NOT_SUSPECT,
        Classification.NON_CONFORMING_SUFFICIENT_SAMPLE: Relationship.SUSPECT,
        Classification.INSUFFICIENT_SAMPLE: Relationship.INSUFFICIENT_SAMPLE,
    },
}


@dataclass(frozen=True)
class RoutedDocument:
    """A document tagged with its route; `content` is the original bytes."""
    relationship: Relationship
    classification: Classification
    content: bytes
    histogram: Histogram
    assessment: BenfordAssessment
    source: Optional[str] = None


_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def decode_document(content: bytes) -> str:
    """Decode document bytes, normalising line endings."""
    return "\n".join(_LINE_BREAK.split(content.decode("utf-8", errors="replace")))


class BenfordProcessor:
    """Routes documents by leading-digit conformance to Benford's Law."""

    def __init__(self, config: Optional[ClassifierConfig] = None,
                 classifier: Optional[BenfordClassifier] = None):
        self.config = (config or ClassifierConfig()).validate()
        self.classifier = classifier or BenfordClassifier()

    @classmethod
    def from_properties(cls, properties: dict[str, str],
                        mode: RoutingMode = RoutingMode.THREE_WAY) -> "BenfordProcessor":
        return cls(ClassifierConfig.from_properties(properties, mode=mode))

    def property_descriptors(self) -> tuple[PropertyDescriptor, ...]:
        return PROPERTY_DESCRIPTORS[self.config.mode]

    def relationships(self) -> set[Relationship]:
        """Routes this processor can emit."""
        routes = set(ROUTES[self.config.mode].values())
        ungated = not self.config.min_sample
        if self.config.mode is RoutingMode.TWO_WAY and ungated and not self.config.strict_minimum:
            routes.discard(Relationship.INSUFFICIENT_SAMPLE)
        return routes

    def process(self, content: bytes, source: Optional[str] = None) -> RoutedDocument:
        """
        Classify one document.

        Args:
            content: Raw document bytes
            source: Optional label for logging (file name, flow id)

        Returns:
            RoutedDocument carrying the relationship and the unchanged bytes
        """
        histogram = extract_leading_digit_histogram(decode_document(content))
        assessment = self.classifier.evaluate(
            histogram,
            alpha=self.config.alpha,
            min_sample=self.config.min_sample,
            strict_minimum=self.config.strict_minimum,
        )
        relationship = ROUTES[self.config.mode][assessment.classification]

        if assessment.tested:
            logger.debug(f"{source or '<document>'}: n={assessment.sample_size} "
                         f"chi2={assessment.chi_square:.3f} p={assessment.p_value:.4g} -> {relationship.name}")
        else:
            logger.debug(f"{source or '<document>'}: n={assessment.sample_size} untested -> {relationship.name}")

        return RoutedDocument(
            relationship=relationship,
            classification=assessment.classification,
            content=content,
            histogram=histogram,
            assessment=assessment,
            source=source,
        )
