import yaml
import os
from pathlib import Path
from typing import Dict, Any, List, Optional
from models.event_payload import MilestonePayload
from models.student_event import StudentEvent, EventType
from models.student_record import StudentRecordView
from models.urgency import UrgencyTier
import logging

logger = logging.getLogger(__name__)


class PromptManager:
    """
    Manages prompt templates with hot-reload support

    Loads prompts from YAML files and provides methods to build
    prompts from a student's current triage state.
    """

    def __init__(self, prompts_dir: Optional[str] = None):
        if prompts_dir is None:
            # Default to prompts/ directory in the same location as this file
            prompts_dir = Path(__file__).parent

        self.prompts_dir = Path(prompts_dir)
        self.cache: Dict[str, Dict[str, Any]] = {}
        logger.info(f"PromptManager initialized with directory: {self.prompts_dir}")

    def get_prompt_config(self, prompt_name: str) -> Dict[str, Any]:
        """
        Load prompt configuration from YAML file with hot-reload support

        Args:
            prompt_name: Name of the prompt file (without .yaml extension)

        Returns:
            Dictionary containing the prompt configuration
        """
        filepath = self.prompts_dir / f"{prompt_name}.yaml"

        if not filepath.exists():
            raise FileNotFoundError(f"Prompt file not found: {filepath}")

        # Get file modification time for hot-reload
        mtime = os.path.getmtime(filepath)

        cache_key = prompt_name

        # Check if we need to reload (file changed or not in cache)
        if cache_key not in self.cache or self.cache[cache_key].get('mtime') != mtime:
            logger.info(f"Loading/reloading prompt: {prompt_name}")
            with open(filepath, 'r') as f:
                config = yaml.safe_load(f)

            self.cache[cache_key] = {
                'data': config,
                'mtime': mtime
            }

        return self.cache[cache_key]['data']

    def build_outreach_prompt(self, student: StudentRecordView) -> str:
        """
        Build the outreach prompt using the YAML configuration

        Args:
            student: Snapshot of the student to write to

        Returns:
            Complete prompt string ready for Claude
        """
        config = self.get_prompt_config("outreach_message")

        tier = UrgencyTier.from_score(student.urgency_score)
        urgency_context = config['urgency_contexts'][tier.value]

        sections = [config['system_role'].strip()]

        sections.append(f"\n{config['student_header']}")
        sections.append(config['student_format'].format(
            first_name=student.first_name,
            last_name=student.last_name,
            student_id=student.id,
            urgency=student.urgency_score,
            urgency_context=urgency_context
        ).rstrip())

        sections.append(f"\n{config['events']['header']}")
        sections.append(self._build_events_section(student.recent_events, config['events']))

        sections.append(f"\n{config['guidelines_header']}")
        for i, guideline in enumerate(config.get('guidelines', []), 1):
            sections.append(f"{i}. {guideline}")

        sections.append(f"\n{config['final_instruction']}")

        return "\n".join(sections)

    def _build_events_section(self, events: List[StudentEvent], config: Dict) -> str:
        """Build the numbered recent events list"""
        if not events:
            return config.get('empty', 'No recent events')

        max_chars = config.get('max_text_chars', 200)
        format_str = config.get('format', '{index}. {date} - {description}')

        lines = []
        for index, event in enumerate(events, 1):
            lines.append(format_str.format(
                index=index,
                date=event.timestamp.strftime('%m/%d/%Y'),
                description=self._describe_event(event, max_chars)
            ))

        return "\n".join(lines)

    def _describe_event(self, event: StudentEvent, max_chars: int) -> str:
        """One-line description of an event for the prompt"""
        kind = event.kind

        if kind == EventType.CALL_TRANSCRIPT:
            return f'Call transcript: "{self._truncate(event.value, max_chars)}"'
        if kind == EventType.MESSAGE:
            return f'Message: "{self._truncate(event.value, max_chars)}"'
        if kind == EventType.EXAM_SCORE:
            return f"Exam score: {event.value}"
        if kind == EventType.MILESTONE:
            milestone = MilestonePayload.parse(event.value)
            if milestone is None:
                return f"Milestone: {event.value}"
            name = milestone.name or 'Upcoming milestone'
            return f"Milestone: {name} on {milestone.date.strftime('%m/%d/%Y')}"
        if kind == EventType.VIDEO_WATCHED:
            return f"Video watched: {event.value} complete"
        return f"{event.type}: {event.value}"

    @staticmethod
    def _truncate(text: str, max_chars: int) -> str:
        if len(text) > max_chars:
            return text[:max_chars] + '...'
        return text


# Singleton instance
prompt_manager = PromptManager()
