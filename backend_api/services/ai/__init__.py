"""
Chat Layer for the Emissions Dashboard

Deterministic keyword rules answer questions from the dataset; web search
answers are delegated to the cached search service.
"""

from .intent_router import IntentRouter, DataAnswer, TopicalAnswer, DefaultAnswer
from .chatbot import EmissionsChatbotService, ChatAnswer

__all__ = [
    "IntentRouter",
    "DataAnswer",
    "TopicalAnswer",
    "DefaultAnswer",
    "EmissionsChatbotService",
    "ChatAnswer",
]
