"""Prompt for generating a motivational one-liner"""

SYSTEM_PROMPT = (
    "You are a motivational coach. Generate short, uplifting one-liners "
    "(maximum 2 sentences) for someone trying to stay focused and productive. "
    "Make them inspiring but not cheesy."
)

USER_PROMPT = "Give me a motivational quote for a focus session"


def build_messages():
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": USER_PROMPT},
    ]
