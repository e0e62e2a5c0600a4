"""
"Ask the Captain": turns a matcher ranking into the reply a guest sees.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from .config import settings
from .faq_data import FaqEntry
from .faq_matcher import FaqMatcher, MatchCandidate

logger = logging.getLogger(__name__)

# The top match must beat this to be used as the answer
ANSWER_THRESHOLD = 50
# A runner-up must beat this to be suggested as a follow-up
FOLLOW_UP_THRESHOLD = 40

WELCOME_MESSAGE = (
    "Ahoy! I'm Captain's Assistant. Ask me anything about our heritage lounge in Galle Fort - "
    "pricing, services, location, or facilities. How can I help you today?"
)

QUICK_QUESTIONS = [
    "How much does it cost?",
    "What time slots are available?",
    "Where are you located?",
    "What's included in booking?",
    "Can I store luggage?",
]

FALLBACK_MESSAGE = f"""I don't have a specific answer for that question, but I'd be happy to help! For detailed inquiries, please contact us directly:

📧 **General Information:** {settings.general_contact}
📧 **Immediate Assistance:** {settings.contact_recipient}

Or try asking about:
• Pricing and booking rates
• Available time slots
• Location and directions
• Included amenities and services
• Heritage building history

What else would you like to know about Captain's Lounge?"""


@dataclass(frozen=True)
class Answered:
    answer: str
    match: MatchCandidate
    follow_up: Optional[str] = None

    @property
    def entry(self) -> FaqEntry:
        return self.match.entry

    @property
    def text(self) -> str:
        if self.follow_up:
            return f'{self.answer}\n\nYou might also be interested in: "{self.follow_up}"'
        return self.answer


@dataclass(frozen=True)
class Unanswered:
    fallback: str = FALLBACK_MESSAGE

    @property
    def text(self) -> str:
        return self.fallback


TurnReply = Union[Answered, Unanswered]


def select_reply(candidates: List[MatchCandidate]) -> TurnReply:
    if not candidates or candidates[0].score <= ANSWER_THRESHOLD:
        return Unanswered()

    best = candidates[0]
    follow_up = None
    if len(candidates) > 1 and candidates[1].score > FOLLOW_UP_THRESHOLD:
        follow_up = candidates[1].entry.question
    return Answered(answer=best.entry.answer, match=best, follow_up=follow_up)


class CaptainAssistant:
    def __init__(self, matcher: Optional[FaqMatcher] = None):
        self.matcher = matcher or FaqMatcher()

    def reply(self, question: str) -> TurnReply:
        candidates = self.matcher.match(question)
        result = select_reply(candidates)
        if isinstance(result, Answered):
            logger.info(
                f"FAQ answered: id={result.entry.id} score={result.match.score} "
                f"type={result.match.match_type.value}"
            )
        else:
            top = candidates[0].score if candidates else 0
            logger.info(f"FAQ unanswered (candidates={len(candidates)}, top score={top})")
        return result
