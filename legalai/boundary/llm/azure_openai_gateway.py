"""
Azure OpenAI chat-completion gateway.

Thin wrapper over langchain-openai AzureChatOpenAI exposing the two calls
the redline pipeline makes: whole-document analysis and single-finding
verification. Both request JSON-object output.

Error contract:
    - Missing endpoint or key: ConfigurationError before any network call
    - Non-success response: LLMTransportError carrying the raw error body
    - Unparseable output: never raised; analysis yields [] and verification
      yields an "unverified" verdict

No retries are performed.

Dependencies: langchain_openai, langchain_core, openai
System role: Outbound language-model boundary
"""

import json
import logging
from typing import Any

import openai
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_openai import AzureChatOpenAI

from legalai.configs.azure_openai import AzureOpenAISettings
from legalai.core.exceptions import ConfigurationError, LLMParseError, LLMTransportError

logger = logging.getLogger(__name__)

ANALYSIS_TEMPERATURE = 0.3
VERIFICATION_TEMPERATURE = 0.2

UNPARSEABLE_VERIFICATION = {
    "verification_status": "unverified",
    "notes": "Failed to parse verification",
}


def parse_json_content(content: Any) -> dict:
    """
    Parse a model response body as a JSON object.

    Handles responses wrapped in markdown code blocks.

    Raises:
        LLMParseError: If the content is not a JSON object
    """
    text = content if isinstance(content, str) else str(content)
    if "```json" in text:
        text = text.split("```json")[1].split("```")[0]
    elif "```" in text:
        text = text.split("```")[1].split("```")[0]

    try:
        data = json.loads(text.strip())
    except (json.JSONDecodeError, ValueError) as e:
        raise LLMParseError(f"Model output is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise LLMParseError("Model output is not a JSON object")
    return data


class AzureOpenAIGateway:
    """
    Gateway to Azure OpenAI deployments.

    Settings are read once at construction. Chat clients are built lazily
    and cached per (deployment, temperature, max_tokens).

    Usage:
        gateway = AzureOpenAIGateway(get_settings().azure_openai)
        findings = await gateway.analyze_document(text, system_prompt, "gpt-4")
        verdict = await gateway.verify_finding(prompt, "gpt-4o")
    """

    def __init__(self, settings: AzureOpenAISettings) -> None:
        self._settings = settings
        self._clients: dict[tuple[str, float, int], Any] = {}

    @property
    def is_configured(self) -> bool:
        return self._settings.is_configured

    def _ensure_configured(self) -> None:
        if not self._settings.is_configured:
            raise ConfigurationError(
                "Azure OpenAI is not configured",
                details={"required": ["AZURE_OPENAI_ENDPOINT", "AZURE_OPENAI_API_KEY"]},
            )

    def _get_client(self, deployment: str | None, temperature: float, max_tokens: int):
        deployment = deployment or self._settings.deployment_name
        cache_key = (deployment, temperature, max_tokens)
        if cache_key not in self._clients:
            llm = AzureChatOpenAI(
                azure_endpoint=self._settings.endpoint,
                api_key=self._settings.api_key,
                api_version=self._settings.api_version,
                azure_deployment=deployment,
                temperature=temperature,
                max_tokens=max_tokens,
                timeout=self._settings.request_timeout,
                max_retries=0,
            )
            self._clients[cache_key] = llm.bind(response_format={"type": "json_object"})
        return self._clients[cache_key]

    async def _complete(
        self,
        messages: list[BaseMessage],
        deployment: str | None,
        temperature: float,
        max_tokens: int,
    ) -> str:
        self._ensure_configured()
        client = self._get_client(deployment, temperature, max_tokens)
        try:
            response = await client.ainvoke(messages)
        except openai.APIStatusError as e:
            raise LLMTransportError(
                f"Azure OpenAI API error: {e.response.text}",
                status_code=e.status_code,
                details={"deployment": deployment},
            ) from e
        except openai.APIError as e:
            raise LLMTransportError(
                f"Azure OpenAI API error: {e}",
                details={"deployment": deployment},
            ) from e
        return response.content

    async def analyze_document(
        self,
        document_text: str,
        system_prompt: str,
        deployment: str | None = None,
    ) -> list[dict]:
        """
        Ask the model for findings on a whole document.

        Args:
            document_text: Extracted document text (sent as the user message)
            system_prompt: Analysis instruction
            deployment: Deployment name (defaults to configured deployment)

        Returns:
            list[dict]: Raw finding objects from the "findings" array; empty
            when the output cannot be parsed

        Raises:
            ConfigurationError: Gateway credentials missing
            LLMTransportError: Endpoint returned an error
        """
        content = await self._complete(
            [SystemMessage(content=system_prompt), HumanMessage(content=document_text)],
            deployment,
            ANALYSIS_TEMPERATURE,
            self._settings.analysis_max_tokens,
        )

        try:
            data = parse_json_content(content)
        except LLMParseError as e:
            logger.error(
                "Failed to parse analysis response as JSON",
                extra={"deployment": deployment, "error": str(e)},
            )
            return []

        findings = data.get("findings") or []
        if not isinstance(findings, list):
            logger.error(
                "Analysis response findings is not a list",
                extra={"deployment": deployment},
            )
            return []
        return [f for f in findings if isinstance(f, dict)]

    async def verify_finding(
        self,
        prompt: str,
        deployment: str | None = None,
    ) -> dict:
        """
        Ask the model to verify one finding.

        Args:
            prompt: Verification prompt (sent as the only message)
            deployment: Deployment name (defaults to configured deployment)

        Returns:
            dict: {"verification_status": ..., "notes": ...}

        Raises:
            ConfigurationError: Gateway credentials missing
            LLMTransportError: Endpoint returned an error
        """
        content = await self._complete(
            [HumanMessage(content=prompt)],
            deployment,
            VERIFICATION_TEMPERATURE,
            self._settings.verification_max_tokens,
        )

        try:
            return parse_json_content(content)
        except LLMParseError as e:
            logger.warning(
                "Failed to parse verification response",
                extra={"deployment": deployment, "error": str(e)},
            )
            return dict(UNPARSEABLE_VERIFICATION)
