"""
AI drafting aid: Groq chat model via LangChain with structured output.

The analyzer is best-effort. Every failure (no key, network, quota, a
response that does not fit the schema) ends as ``None`` and a log line.
"""
import logging
from typing import Any, Optional

from fastapi import Request
from langchain_core.prompts import ChatPromptTemplate
from langchain_groq import ChatGroq

from eduresolve.core.config import settings
from eduresolve.schemas.complaints import AIInsight

logger = logging.getLogger(__name__)

ANALYSIS_PROMPT = ChatPromptTemplate.from_template(
    """You are an administrative assistant for a university. Analyze the following student complaint and provide:
1. A summary of the core issue.
2. A suggested resolution or immediate action step.
3. An appropriate tone for the response.

Subject: {subject}
Description: {description}"""
)


class ComplaintAnalyzer:
    def __init__(self, llm: Optional[Any] = None):
        self.llm = llm
        if self.llm is None and settings.GROQ_API_KEY:
            self.llm = ChatGroq(
                model=settings.GROQ_MODEL,
                api_key=settings.GROQ_API_KEY,
                temperature=settings.AI_TEMPERATURE,
            )
            logger.info("✅ Groq LLM initialized")
        elif self.llm is None:
            logger.warning("⚠️  GROQ_API_KEY not set. AI drafting is disabled.")

    @property
    def available(self) -> bool:
        return self.llm is not None

    async def analyze(self, subject: str, description: str) -> Optional[AIInsight]:
        if not self.available:
            return None

        try:
            chain = ANALYSIS_PROMPT | self.llm.with_structured_output(AIInsight)
            insight = await chain.ainvoke({"subject": subject, "description": description})
            if not isinstance(insight, AIInsight):
                insight = AIInsight.model_validate(insight)
            return insight
        except Exception as e:
            logger.error(f"❌ AI analysis failed: {e}")
            return None


def get_analyzer(request: Request) -> ComplaintAnalyzer:
    """FastAPI dependency; the analyzer is built once in the app lifespan."""
    return request.app.state.analyzer
