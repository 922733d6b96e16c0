"""
Commit message cleaning for raw AI replies.
"""

import re
from loguru import logger


THINK_BLOCK = re.compile(r'<think>.*?</think>', re.DOTALL | re.IGNORECASE)
CODE_FENCE = re.compile(r'^```[\w-]*\s*$', re.MULTILINE)


def clean_commit_message(raw_response: str) -> str:
    """Strip reasoning blocks, markdown fences and surrounding whitespace."""
    cleaned = THINK_BLOCK.sub('', raw_response)
    cleaned = CODE_FENCE.sub('', cleaned)
    cleaned = cleaned.strip()

    if cleaned != raw_response.strip():
        logger.debug(f"Cleaned commit message from {len(raw_response)} to {len(cleaned)} characters")
    return cleaned
