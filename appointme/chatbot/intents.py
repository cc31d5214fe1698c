"""
Keyword intent classifier for the assistant.

Rules are evaluated in order and the first match wins, so the order of
INTENT_RULES is part of the behaviour.
"""
import re
from enum import Enum


class Intent(str, Enum):
    BOOKING = "booking"
    PROVIDER = "provider"
    ADMIN = "admin"
    PAYMENT = "payment"
    TECHNICAL = "technical"
    GENERAL = "general"


def keywords(*words: str) -> re.Pattern:
    return re.compile(r"\b(" + "|".join(re.escape(w) for w in words) + r")\b")


INTENT_RULES: list[tuple[re.Pattern, Intent]] = [
    (keywords("book", "booking", "appointment", "service", "schedule", "available", "price", "cost"),
     Intent.BOOKING),
    (keywords("provider", "become", "apply", "application", "join", "register", "verification", "approve"),
     Intent.PROVIDER),
    (keywords("admin", "approve", "reject", "manage", "dashboard", "review", "application"),
     Intent.ADMIN),
    (keywords("payment", "pay", "money", "transaction", "refund", "billing", "charge"),
     Intent.PAYMENT),
    (keywords("how", "help", "error", "problem", "issue", "support", "trouble", "login", "password"),
     Intent.TECHNICAL),
]


def normalize(message: str) -> str:
    return message.strip().lower()


def classify(message: str) -> Intent:
    text = normalize(message)
    for pattern, intent in INTENT_RULES:
        if pattern.search(text):
            return intent
    return Intent.GENERAL
