"""Trigger classifier: decides from one conversational turn whether a human must take over."""

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from escalation.config import DEFAULT_CONFIG, EscalationConfig
from escalation.keywords import DEFAULT_KEYWORDS, EscalationKeywords, find_keyword
from escalation.schemas import EscalationDetection, EscalationPriority, EscalationTrigger


@dataclass(frozen=True)
class TurnSignals:
    """Inputs of one classification, with the message already lowercased."""
    text: str
    confidence: float
    failure_count: int
    customer_id: Optional[str]
    config: EscalationConfig


@dataclass(frozen=True)
class EscalationRule:
    """
    One row of the rule table.

    ``match`` returns the audit metadata when the rule fires, ``None``
    otherwise; ``describe`` turns that metadata into the reason string.
    """
    name: str
    trigger: EscalationTrigger
    priority: EscalationPriority
    match: Callable[[TurnSignals], Optional[Dict[str, Any]]]
    describe: Callable[[Dict[str, Any]], str]

    @property
    def is_urgent(self) -> bool:
        return self.priority == EscalationPriority.URGENT

    def evaluate(self, signals: TurnSignals) -> Optional[EscalationDetection]:
        metadata = self.match(signals)
        if metadata is None:
            return None
        return EscalationDetection(
            should_escalate=True,
            trigger=self.trigger,
            priority=self.priority,
            reason=self.describe(metadata),
            is_urgent=self.is_urgent,
            metadata=metadata,
        )


def _keyword_matcher(
    keywords: Tuple[str, ...],
    extra: Optional[Dict[str, Any]] = None,
) -> Callable[[TurnSignals], Optional[Dict[str, Any]]]:
    def match(signals: TurnSignals) -> Optional[Dict[str, Any]]:
        keyword = find_keyword(signals.text, keywords)
        if keyword is None:
            return None
        return {"keyword": keyword, **(extra or {})}
    return match


def _match_vip(signals: TurnSignals) -> Optional[Dict[str, Any]]:
    if signals.config.is_vip(signals.customer_id):
        return {"customer_id": signals.customer_id}
    return None


def _match_low_confidence(signals: TurnSignals) -> Optional[Dict[str, Any]]:
    threshold = signals.config.confidence_threshold
    if signals.confidence < threshold:
        return {"confidence": signals.confidence, "threshold": threshold}
    return None


def _match_repeated_failure(signals: TurnSignals) -> Optional[Dict[str, Any]]:
    threshold = signals.config.failure_count_threshold
    if signals.failure_count >= threshold:
        return {"failure_count": signals.failure_count, "threshold": threshold}
    return None


def _percent(value: float) -> int:
    # halves round up, never to even
    return math.floor(value * 100 + 0.5)


def build_rules(keywords: EscalationKeywords = DEFAULT_KEYWORDS) -> List[EscalationRule]:
    """The rule table, in evaluation order. The first rule that matches wins."""
    return [
        EscalationRule(
            name="urgent_keyword",
            trigger=EscalationTrigger.URGENT_ISSUE,
            priority=EscalationPriority.URGENT,
            match=_keyword_matcher(keywords.urgent),
            describe=lambda m: f"Urgent issue detected: {m['keyword']}",
        ),
        EscalationRule(
            name="complaint_keyword",
            trigger=EscalationTrigger.CUSTOMER_FRUSTRATION,
            priority=EscalationPriority.HIGH,
            match=_keyword_matcher(keywords.complaint, {"type": "complaint"}),
            describe=lambda m: f"Complaint/refund request: {m['keyword']}",
        ),
        EscalationRule(
            name="human_request_keyword",
            trigger=EscalationTrigger.EXPLICIT_REQUEST,
            priority=EscalationPriority.HIGH,
            match=_keyword_matcher(keywords.human_request),
            describe=lambda m: f"Customer requested human support: {m['keyword']}",
        ),
        EscalationRule(
            name="frustration_keyword",
            trigger=EscalationTrigger.CUSTOMER_FRUSTRATION,
            priority=EscalationPriority.HIGH,
            match=_keyword_matcher(keywords.frustration),
            describe=lambda m: f"Customer frustration detected: {m['keyword']}",
        ),
        EscalationRule(
            name="vip_customer",
            trigger=EscalationTrigger.VIP_CUSTOMER,
            priority=EscalationPriority.HIGH,
            match=_match_vip,
            describe=lambda m: "VIP customer requires human assistance",
        ),
        EscalationRule(
            name="low_confidence",
            trigger=EscalationTrigger.LOW_CONFIDENCE,
            priority=EscalationPriority.MEDIUM,
            match=_match_low_confidence,
            describe=lambda m: f"Low confidence score: {_percent(m['confidence'])}%",
        ),
        EscalationRule(
            name="repeated_failure",
            trigger=EscalationTrigger.REPEATED_FAILURE,
            priority=EscalationPriority.MEDIUM,
            match=_match_repeated_failure,
            describe=lambda m: f"{m['failure_count']} consecutive failed intent detections",
        ),
    ]


NO_ESCALATION = EscalationDetection(
    should_escalate=False,
    trigger=None,
    priority=EscalationPriority.LOW,
    reason="",
    is_urgent=False,
)


class TriggerClassifier:
    """Evaluates the rule table against a single turn. Holds no mutable state."""

    def __init__(self, keywords: Optional[EscalationKeywords] = None):
        self.keywords = keywords or DEFAULT_KEYWORDS
        self._rules = tuple(build_rules(self.keywords))

    @property
    def rules(self) -> Tuple[EscalationRule, ...]:
        return self._rules

    def classify(
        self,
        message: str,
        confidence: float,
        failure_count: int,
        customer_id: Optional[str] = None,
        config: Optional[EscalationConfig] = None,
    ) -> EscalationDetection:
        signals = TurnSignals(
            text=(message or "").lower(),
            confidence=confidence,
            failure_count=failure_count,
            customer_id=(customer_id or "").strip() or None,
            config=config or DEFAULT_CONFIG,
        )
        for rule in self._rules:
            detection = rule.evaluate(signals)
            if detection is not None:
                return detection
        return NO_ESCALATION.model_copy(update={"metadata": {}})


_default_classifier = TriggerClassifier()


def detect_escalation(
    message: str,
    confidence: float,
    failure_count: int,
    customer_id: Optional[str] = None,
    config: Optional[EscalationConfig] = None,
    keywords: Optional[EscalationKeywords] = None,
) -> EscalationDetection:
    """Classify one turn with the default rule table (or one built from ``keywords``)."""
    classifier = _default_classifier if keywords is None else TriggerClassifier(keywords)
    return classifier.classify(message, confidence, failure_count, customer_id, config)
