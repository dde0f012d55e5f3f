"""
Content — Static text content

Text is data, not code embedded in methods.
"""

from .prompts import SOP_ASSISTANT_SYSTEM_PROMPT, SOP_ASSISTANT_USER_TEMPLATE
