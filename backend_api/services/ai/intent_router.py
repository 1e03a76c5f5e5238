"""
Rule-Based Intent Router for the Emissions Chatbot

Rules are evaluated in a fixed priority order; the first match answers:

Rule 1: Data intent (dashboard keywords) -> answer from aggregated data
Rule 2: Topical intent (sector names) -> canned explanation
Rule 3: Default -> generic description of the dashboard

Data intent is checked before topical intent, so "energy sector in 2020"
is answered from the dataset rather than the canned energy text.
"""

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from backend_model.config import settings
from backend_model.logger import logger
from backend_model.services.aggregation import SummaryAggregator


# Rule 1: any of these marks a question about the dashboard data
DATA_KEYWORDS = ("year", "sector", "dashboard", "highest", "top")

YEAR_PATTERN = re.compile(r"20\d{2}")

UNIT = "MtCO₂e"

# Rule 2: first match wins, in this order
TOPICAL_ANSWERS: Tuple[Tuple[str, str], ...] = (
    (
        "transport",
        "Transport emissions mainly come from road vehicles, aviation and shipping. "
        "Solutions: EVs, public transport, fuel efficiency.",
    ),
    (
        "energy",
        "The energy sector (electricity & heat) is usually the largest source of global emissions. "
        "Renewables and efficiency help reduce it.",
    ),
    (
        "agriculture",
        "Agriculture emits methane and nitrous oxide from livestock and fertilisers. "
        "Improved practices and dietary shifts help.",
    ),
)

# Rule 3
DEFAULT_ANSWER = (
    'This dashboard compares sectors over time. Ask e.g. "Which sector is highest in 2020?" '
    'for local data, or tick "Search web" and ask "India latest emissions" for internet results.'
)

SOURCE_LOCAL_DATA = "local-data"
SOURCE_TOPICAL = "topical"


@dataclass(frozen=True)
class DataAnswer:
    text: str
    year: int
    top_sector: Optional[str] = None
    source: str = SOURCE_LOCAL_DATA
    intent: str = "data"


@dataclass(frozen=True)
class TopicalAnswer:
    text: str
    topic: str
    source: str = SOURCE_TOPICAL
    intent: str = "topical"


@dataclass(frozen=True)
class DefaultAnswer:
    text: str = DEFAULT_ANSWER
    source: str = SOURCE_TOPICAL
    intent: str = "default"


RoutedAnswer = Union[DataAnswer, TopicalAnswer, DefaultAnswer]


@dataclass(frozen=True)
class Rule:
    """A named (predicate, handler) pair"""
    name: str
    matches: Callable[[str], bool]
    handle: Callable[[str], RoutedAnswer]


def is_data_question(text: str) -> bool:
    """True if the lowercased message mentions any data keyword"""
    return any(keyword in text for keyword in DATA_KEYWORDS)


def extract_year(text: str, default: Optional[int] = None) -> int:
    """First 20xx token in the message, or the default year"""
    match = YEAR_PATTERN.search(text)
    if match:
        return int(match.group(0))
    return settings.default_year if default is None else default


def match_topic(text: str) -> Optional[Tuple[str, str]]:
    """First (topic, answer) pair whose topic occurs in the message"""
    for topic, answer in TOPICAL_ANSWERS:
        if topic in text:
            return topic, answer
    return None


class IntentRouter:
    """
    Deterministic classifier over chat message text.

    Holds no state beyond the aggregator it reads from; the same message
    always produces the same answer.
    """

    def __init__(self, aggregator: SummaryAggregator, default_year: Optional[int] = None):
        self.aggregator = aggregator
        self.default_year = settings.default_year if default_year is None else default_year
        self.rules: List[Rule] = [
            Rule("data", is_data_question, self._answer_from_data),
            Rule("topical", lambda text: match_topic(text) is not None, self._answer_topical),
            Rule("default", lambda text: True, lambda text: DefaultAnswer()),
        ]

    def route(self, message: Optional[str]) -> RoutedAnswer:
        """
        Classify a message and produce its answer.

        Args:
            message: Raw chat text (None is treated as empty)

        Returns:
            DataAnswer, TopicalAnswer or DefaultAnswer
        """
        text = (message or "").lower().strip()
        for rule in self.rules:
            if rule.matches(text):
                logger.info(f"Intent '{rule.name}' matched: {text[:50]}")
                return rule.handle(text)
        # The default rule always matches
        return DefaultAnswer()

    def _answer_from_data(self, text: str) -> DataAnswer:
        year = extract_year(text, self.default_year)
        summary = self.aggregator.summarize(year)

        if summary.is_empty:
            return DataAnswer(
                text=f"In this dashboard, there is no data available for year {year}.",
                year=year,
            )

        ranked = SummaryAggregator.rank(summary)
        top_sector, top_value = ranked[0]
        breakdown = "; ".join(f"{sector}: {value} {UNIT}" for sector, value in ranked)
        return DataAnswer(
            text=(
                f"In {year}, the highest emitting sector in this dashboard is {top_sector} "
                f"with {top_value} {UNIT}. Full breakdown: {breakdown}."
            ),
            year=year,
            top_sector=top_sector,
        )

    def _answer_topical(self, text: str) -> TopicalAnswer:
        topic, answer = match_topic(text)
        return TopicalAnswer(text=answer, topic=topic)
