"""Language-model gateway for document analysis and finding verification."""

from legalai.boundary.llm.azure_openai_gateway import AzureOpenAIGateway, parse_json_content

__all__ = ["AzureOpenAIGateway", "parse_json_content"]
