"""
AppointMe assistant. Answers come from the external text generation service
when it is configured and from the canned table otherwise.
"""
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from appointme.api.deps import TextGeneratorDep
from appointme.chatbot import responder
from appointme.chatbot.responses import FAQS, QUICK_RESPONSES, respond
from appointme.core.config import settings

router = APIRouter(prefix="/chatbot", tags=["chatbot"])


class ChatMessage(BaseModel):
    message: str = Field(min_length=1, max_length=1000)


class ChatReply(BaseModel):
    success: bool = True
    message: str
    type: str


class FAQ(BaseModel):
    question: str
    answer: str


class QuickResponses(BaseModel):
    success: bool = True
    quick_responses: list[str]


class FAQs(BaseModel):
    success: bool = True
    faqs: list[FAQ]


class ChatbotStatus(BaseModel):
    success: bool = True
    message: str
    api_key_configured: bool
    model: str


@router.post("/message", response_model=ChatReply)
async def send_message(body: ChatMessage, generator: TextGeneratorDep) -> Any:
    answer, reply_type = await responder.reply(body.message, generator)
    return ChatReply(message=answer, type=reply_type)


@router.post("/simple", response_model=ChatReply)
def send_simple_message(body: ChatMessage) -> Any:
    """
    Canned answers only, without calling the external service.
    """
    return ChatReply(message=respond(body.message), type="fallback_response")


@router.get("/quick-responses", response_model=QuickResponses)
def quick_responses() -> Any:
    return QuickResponses(quick_responses=QUICK_RESPONSES)


@router.get("/faqs", response_model=FAQs)
def faqs() -> Any:
    return FAQs(faqs=FAQS)


@router.get("/test", response_model=ChatbotStatus)
def test_chatbot() -> Any:
    return ChatbotStatus(
        message="Chatbot controller is working",
        api_key_configured=bool(settings.GEMINI_API_KEY),
        model=settings.GEMINI_MODEL,
    )
