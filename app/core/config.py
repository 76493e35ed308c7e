import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

_SUPABASE_URL = os.getenv('SUPABASE_URL')
_SUPABASE_KEY = os.getenv('SUPABASE_KEY')

_ANTHROPIC_API_KEY = os.getenv('ANTHROPIC_API_KEY') or os.getenv('CLAUDE_API_KEY')

_CLAUDE_MODEL_PRIMARY = os.getenv('CLAUDE_MODEL_PRIMARY') or os.getenv('CLAUDE_MODEL', 'claude-sonnet-4-5-20250929')
_CLAUDE_MODEL_FALLBACKS = [
    model.strip()
    for model in os.getenv('CLAUDE_MODEL_FALLBACKS', 'claude-3-5-haiku-20241022').split(',')
    if model.strip()
]
_CLAUDE_MODEL_OPTIONS = [_CLAUDE_MODEL_PRIMARY] + [m for m in _CLAUDE_MODEL_FALLBACKS if m and m != _CLAUDE_MODEL_PRIMARY]

_INSIGHT_MAX_TOKENS = int(os.getenv('INSIGHT_MAX_TOKENS', '2000'))
_LLM_TIMEOUT_SECONDS = float(os.getenv('LLM_TIMEOUT_SECONDS', '60'))
_LLM_MAX_RETRIES = int(os.getenv('LLM_MAX_RETRIES', '2'))

# Bump when prompt or parsing logic changes; stored insights with an older
# version are regenerated on the next request.
_INSIGHT_SOURCE_VERSION = int(os.getenv('INSIGHT_SOURCE_VERSION', '1'))


class Config:
    """Central configuration for the insight service."""

    SUPABASE_URL = _SUPABASE_URL
    SUPABASE_KEY = _SUPABASE_KEY

    ANTHROPIC_API_KEY = _ANTHROPIC_API_KEY

    CLAUDE_MODEL_PRIMARY = _CLAUDE_MODEL_PRIMARY
    CLAUDE_MODEL_FALLBACKS = _CLAUDE_MODEL_FALLBACKS
    CLAUDE_MODEL = _CLAUDE_MODEL_PRIMARY
    CLAUDE_MODEL_OPTIONS = _CLAUDE_MODEL_OPTIONS

    INSIGHT_MAX_TOKENS = _INSIGHT_MAX_TOKENS
    LLM_TIMEOUT_SECONDS = _LLM_TIMEOUT_SECONDS
    LLM_MAX_RETRIES = _LLM_MAX_RETRIES

    INSIGHT_SOURCE_VERSION = _INSIGHT_SOURCE_VERSION

    SERVICE_NAME = os.getenv('SERVICE_NAME', 'journal-insight-service')


settings = Config()
