"""Curated embedding model constants for the LiteLLM provider.

You can always pass any valid LiteLLM model string directly.
"""


class EmbeddingModels:
    """Embedding models for LiteLLMEmbeddingClient."""

    # OpenAI
    TEXT_3_SMALL = "text-embedding-3-small"
    TEXT_3_LARGE = "text-embedding-3-large"

    # Google Gemini
    GEMINI_004 = "gemini/text-embedding-004"

    # AWS Bedrock
    BEDROCK_TITAN_V2 = "bedrock/amazon.titan-embed-text-v2:0"
    BEDROCK_COHERE_V3 = "bedrock/cohere.embed-english-v3"


# Native output size per model. Vectors for one model always have this length.
EMBEDDING_DIMENSIONS: dict[str, int] = {
    EmbeddingModels.TEXT_3_SMALL: 1536,
    "openai/text-embedding-3-small": 1536,
    EmbeddingModels.TEXT_3_LARGE: 3072,
    "openai/text-embedding-3-large": 3072,
    EmbeddingModels.GEMINI_004: 768,
    EmbeddingModels.BEDROCK_TITAN_V2: 1024,
    EmbeddingModels.BEDROCK_COHERE_V3: 1024,
}
