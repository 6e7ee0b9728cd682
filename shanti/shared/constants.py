"""
Centralized Constants
=====================
All magic numbers and hardcoded values extracted to one place.
"""

# ==============================================================================
# TOKENIZER
# ==============================================================================

MIN_KEYWORD_LENGTH = 4  # Tokens shorter than this never become keywords

STOP_WORDS = frozenset(
    [
        "about", "after", "again", "being", "because", "before", "between", "could",
        "doing", "from", "have", "into", "over", "than", "that", "their", "there",
        "these", "they", "this", "those", "through", "under", "until", "very",
        "were", "what", "when", "where", "which", "while", "with", "would",
    ]
)


# ==============================================================================
# KNOWLEDGE SOURCES
# ==============================================================================

MAX_COMMUNITY_ENTRIES = 400  # Large community dataset, capped to bound memory
MAX_STUDENT_ENTRIES = 200  # Student survey, capped as well


# ==============================================================================
# RETRIEVAL / CONTEXT
# ==============================================================================

MAX_RETRIEVAL_RESULTS = 3  # Dataset passages per chat query
MAX_CONTEXT_CHARS = 4000  # Upper bound on the combined context string

# Minimum overlap (exclusive) for a wellness guide section to be used.
STATIC_MATCH_THRESHOLD = 1
STATIC_MIN_TOKEN_LENGTH = 4  # "length > 3"
STATIC_SECTION_MARKER = "##"

NO_CONTEXT_SENTINEL = "No specific context found, rely on your inner wisdom."


# ==============================================================================
# LLM SETTINGS
# ==============================================================================

DEFAULT_MODEL = "gemini/gemini-pro"

GENERATION_TEMPERATURE = 0.7
GENERATION_TOP_K = 1
GENERATION_TOP_P = 1.0
GENERATION_MAX_TOKENS = 250

# Sensitive emotional topics must not be filtered upstream.
SAFETY_SETTINGS = [
    {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_NONE"},
    {"category": "HARM_CATEGORY_HATE_SPEECH", "threshold": "BLOCK_NONE"},
    {"category": "HARM_CATEGORY_SEXUALLY_EXPLICIT", "threshold": "BLOCK_NONE"},
    {"category": "HARM_CATEGORY_DANGEROUS_CONTENT", "threshold": "BLOCK_NONE"},
]

INVALID_KEY_PHRASES = ("API key not valid", "API_KEY_INVALID")


# ==============================================================================
# API SETTINGS
# ==============================================================================

REQUEST_TIMEOUT_SECONDS = 30.0  # Single generation call upper bound

CREDENTIAL_KEYS = ("SHANTI_GEMINI_API_KEY", "GEMINI_API_KEY")
CREDENTIAL_PLACEHOLDERS = frozenset(["undefined", "null"])


# ==============================================================================
# FALLBACK RESPONDER
# ==============================================================================

CONTEXT_SUMMARY_LIMIT = 480  # Per-source summary in the chat fallback
QUOTE_SNIPPET_LIMIT = 200  # Echoed user text in journal/mood fallback
