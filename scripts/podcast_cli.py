#!/usr/bin/env python3
# PURPOSE: Command-line driver that lets two hosts talk about a topic using the
#          generate-turn function, without the web client.
# CONTEXT: Needs LOVABLE_API_KEY in the environment; calls the real completion API.

import json, sys
from omnicast.handlers.generate_turn import handler

DEFAULT_TURNS = 6

HOSTS = [
    {"name": "Alex", "role": "software engineer", "personality": "curious and upbeat"},
    {"name": "Sam", "role": "product manager", "personality": "pragmatic and witty"},
]


def parse_turns(raw: str, default: int = DEFAULT_TURNS) -> int:
    """Positive integer from user input; anything else falls back to `default`."""
    raw = raw.strip()
    if raw.isdigit() and int(raw) > 0:
        return int(raw)
    return default


def turn_event(current, other, topic, history):
    # Same envelope the web client sends through API Gateway.
    return {
        "httpMethod": "POST",
        "body": json.dumps({
            "currentHost": current,
            "otherHost": other,
            "topic": topic,
            "conversationHistory": history,
            "options": {"tone": "casual", "includeExamples": True},
        }),
    }


def main():
    print("Omnicast CLI — type a topic and press Enter. Ctrl+C to exit.")

    while True:
        try:
            topic = input("topic> ").strip()
            if not topic:
                continue
            turns = parse_turns(input(f"turns [{DEFAULT_TURNS}]> "))

            history = []
            for i in range(turns):
                current, other = HOSTS[i % 2], HOSTS[(i + 1) % 2]
                resp = handler(turn_event(current, other, topic, history), None)
                body = json.loads(resp["body"])
                if resp["statusCode"] != 200:
                    print(json.dumps(body, indent=2))
                    break

                line = f"{current['name']}: {body['text']}"
                history.append(line)
                print(line)

        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            sys.exit(0)


if __name__ == "__main__":
    main()
