import pytest

from appointme.chatbot import responses
from appointme.chatbot.intents import Intent, classify


@pytest.mark.parametrize(
    "message, intent",
    [
        ("How do I book a service?", Intent.BOOKING),
        ("What is the PRICE?", Intent.BOOKING),
        ("I want to become a provider", Intent.PROVIDER),
        # approve is a provider keyword and provider rules run before admin rules
        ("who will approve me", Intent.PROVIDER),
        ("open the admin dashboard", Intent.ADMIN),
        ("can I get a refund", Intent.PAYMENT),
        ("I forgot my password", Intent.TECHNICAL),
        ("hello there", Intent.GENERAL),
        ("", Intent.GENERAL),
    ],
)
def test_classify(message: str, intent: Intent) -> None:
    assert classify(message) == intent


def test_classify_matches_whole_words_only() -> None:
    # "bookshelf" must not match "book"
    assert classify("my bookshelf") == Intent.GENERAL


@pytest.mark.parametrize(
    "message, expected",
    [
        ("", responses.INTRODUCTION),
        ("   ", responses.INTRODUCTION),
        ("Hello!", responses.GREETING),
        ("How do I book a service?", responses.BOOKING),
        ("How to become a provider?", responses.PROVIDER),
        ("Is payment secure?", responses.PAYMENT),
        ("What services are available?", responses.SERVICES),
        ("Who can approve applications", responses.ADMIN),
        ("I have a login problem", responses.TECHNICAL),
        ("track my order", responses.TRACKING),
        ("give me your phone number", responses.CONTACT),
        ("where do you operate", responses.COVERAGE),
        ("tell me more", responses.ABOUT),
        ("xyzzy", responses.DEFAULT_MENU),
    ],
)
def test_respond(message: str, expected: str) -> None:
    assert responses.respond(message) == expected


def test_greeting_wins_over_later_topics() -> None:
    assert responses.respond("hi, how do I book?") == responses.GREETING


def test_build_prompt_injects_context_intent_and_question() -> None:
    prompt = responses.build_prompt("How do I book a service?")

    assert prompt.startswith(responses.PLATFORM_CONTEXT)
    assert responses.INTENT_FOCUS[Intent.BOOKING] in prompt
    assert prompt.endswith(
        "User Question: How do I book a service?\n\nAppointMe Assistant Response:"
    )


def test_build_prompt_general_focus() -> None:
    assert responses.INTENT_FOCUS[Intent.GENERAL] in responses.build_prompt("good evening")


def test_faqs_and_quick_responses() -> None:
    assert len(responses.QUICK_RESPONSES) == 10
    assert all({"question", "answer"} <= set(faq) for faq in responses.FAQS)
