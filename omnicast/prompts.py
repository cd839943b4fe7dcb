# PURPOSE: Build the system + user message pair for one podcast turn.
# CONTEXT: Pure functions; the turn generator handler sends their output to the
#          chat-completion API unchanged.

from __future__ import annotations
from typing import Dict, List, Optional, Sequence

from omnicast.records import Host, TurnOptions, TurnRequest

HISTORY_WINDOW = 6
DEFAULT_TONE = "casual"
DEFAULT_PERSONALITY = "engaging and knowledgeable"

TONE_DESCRIPTIONS: Dict[str, str] = {
    "casual": "relaxed, friendly, and conversational with natural humor",
    "technical": "in-depth, precise, and educational with technical details",
    "hardcore": "intense, no-nonsense, and challenging with strong opinions",
    "interview": "structured Q&A format helping prepare for interviews",
}


def recent_history(history: Sequence[str], window: int = HISTORY_WINDOW) -> str:
    """Last `window` turns, oldest first, one per line."""
    return "\n".join(list(history)[-window:])


def tone_description(tone: Optional[str]) -> str:
    return TONE_DESCRIPTIONS.get(tone or DEFAULT_TONE, TONE_DESCRIPTIONS[DEFAULT_TONE])


def build_system_prompt(host: Host, options: TurnOptions) -> str:
    """
    Describe who is speaking and how.

    notes:
    - The examples line appears only when includeExamples is true.
    - The reference block appears only when ragContext is a non-empty string.
    """
    lines = [
        f"You are {host['name']}, a {host['role']} in a podcast conversation.",
        f"Your personality: {host.get('personality') or DEFAULT_PERSONALITY}",
        f"The tone should be {tone_description(options.get('tone'))}.",
        "",
        "Respond naturally in 2-3 sentences. Be conversational, engaging, and build on what was just said.",
    ]
    if options.get("includeExamples"):
        lines.append("Include concrete examples when relevant.")
    prompt = "\n".join(lines)
    if options.get("ragContext"):
        prompt += f"\n\nReference material:\n{options['ragContext']}"
    return prompt


def build_user_prompt(other: Host, topic: str, history: Sequence[str]) -> str:
    return (
        f"Previous conversation:\n{recent_history(history)}\n\n"
        f"The other host is {other['name']}, a {other['role']}.\n\n"
        f'What do you say next in this podcast about "{topic}"?'
    )


def build_messages(req: TurnRequest) -> List[Dict[str, str]]:
    options: TurnOptions = req.get("options") or {}
    return [
        {"role": "system", "content": build_system_prompt(req["currentHost"], options)},
        {"role": "user", "content": build_user_prompt(req["otherHost"], req["topic"], req["conversationHistory"])},
    ]
