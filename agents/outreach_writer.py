from anthropic import Anthropic
from typing import Optional
from config import settings
from models.student_record import StudentRecordView
from prompts.prompt_manager import PromptManager, prompt_manager as default_prompt_manager
import logging

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = (
    "Hi {first_name}, I wanted to check in and see how things are going. "
    "Let me know if you need any support!"
)


class OutreachWriter:
    """
    Drafts a personalized check-in message for a student with Claude.

    Generation is best effort: with no API key, an API error, or an empty
    reply, the fixed fallback message is returned instead. Callers never
    see an exception from this class.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        prompts: PromptManager = None,
    ):
        self.model = model or settings.OUTREACH_MODEL
        self.max_tokens = settings.OUTREACH_MAX_TOKENS
        self.prompts = prompts or default_prompt_manager

        # Will stay None without an API key; every call then uses the fallback
        self.client = None
        api_key = api_key if api_key is not None else settings.ANTHROPIC_API_KEY
        if api_key:
            try:
                self.client = Anthropic(api_key=api_key)
            except Exception as e:
                logger.warning(f"Anthropic client not available: {e}")

    def generate_outreach_message(self, student: StudentRecordView) -> str:
        """Generate an outreach message for the student

        Args:
            student: Snapshot of the student's current triage state

        Returns:
            Message text from Claude, or the fallback message
        """
        if not self.client:
            logger.warning("No Anthropic API key - returning default outreach message")
            return self.fallback_message(student)

        try:
            prompt = self.prompts.build_outreach_prompt(student)

            logger.info(f"Calling Claude for outreach message (student {student.id}, urgency {student.urgency_score})")

            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )

            text_blocks = [
                block.text for block in response.content
                if getattr(block, "type", None) == "text" and isinstance(getattr(block, "text", None), str)
            ]
            content = text_blocks[0].strip() if text_blocks else ""

            if not content:
                logger.warning("Empty LLM response, returning default message")
                return self.fallback_message(student)

            return content

        except Exception as e:
            logger.error(f"LLM outreach message error: {e}", exc_info=True)
            return self.fallback_message(student)

    @staticmethod
    def fallback_message(student: StudentRecordView) -> str:
        return FALLBACK_MESSAGE.format(first_name=student.first_name)
