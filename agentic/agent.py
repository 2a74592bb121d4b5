"""Language-model agent that answers natural-language queries."""

from __future__ import annotations

import logging
from enum import Enum

import requests

from agentic.config import Config
from agentic.ollama import ChatMessage, OllamaClient, OllamaConfig, OllamaError

log = logging.getLogger(__name__)

OPENAI_CHAT_URL = "https://api.openai.com/v1/chat/completions"
OLLAMA_BASE_URL = "http://localhost:11434"
OLLAMA_MODEL = "phi4:latest"

_SYSTEM_PROMPT = """You are an intelligent CLI assistant that helps users with terminal commands and task management.

Your primary responsibilities:
1. Convert natural language queries into specific CLI commands
2. Provide helpful explanations for complex commands
3. Suggest best practices and alternatives
4. Help with task management, study preparation, and productivity

Available command categories:
- task: Task management (add, list, complete, priority)
- prep: Study and exam preparation
- blog: Content creation and blogging
- run: Execute arbitrary commands
- agent: AI-powered assistance

When responding:
- Be concise and practical
- Provide the exact command to run when possible
- Include brief explanations for complex commands
- Suggest safer alternatives for potentially dangerous operations
- Use modern CLI tools and best practices

Examples:
User: "prep for cet exam"
Response: "agentic prep start --exam CET --schedule daily"

User: "add a high priority task to build dashboard"
Response: "agentic task add --title 'Build dashboard' --priority high"

User: "show me recent tasks"
Response: "agentic task list --recent"
"""


class AgentError(Exception):
    """Raised when a remote model request fails."""


class AIProvider(Enum):
    OPENAI = "openai"
    OLLAMA = "ollama"


class Agent:
    """Answers queries through OpenAI or a local Ollama server, with offline fallbacks."""

    def __init__(self, config: Config) -> None:
        self.config = config.agent
        self.api_key = config.resolve_openai_api_key()
        self._session = requests.Session()

        if self.config.preferred_provider == "openai" and self.api_key is not None:
            self.provider = AIProvider.OPENAI
        else:
            self.provider = AIProvider.OLLAMA

        self.ollama_client: OllamaClient | None = None
        if self.provider is AIProvider.OLLAMA:
            ollama_config = OllamaConfig(
                base_url=OLLAMA_BASE_URL,
                model=OLLAMA_MODEL,
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
                timeout=self.config.timeout_seconds,
            )
            try:
                self.ollama_client = OllamaClient(ollama_config)
                log.info("Ollama client initialized with phi4 model")
            except OllamaError as exc:
                log.warning("Failed to initialize Ollama client: %s", exc)

    def process_query(self, query: str) -> str:
        log.info("Processing agent query: %s", query)
        if self.provider is AIProvider.OPENAI:
            return self._process_openai_query(query)
        return self._process_ollama_query(query)

    def interpret_command(self, query: str) -> str:
        """Ask for a CLI command that carries out ``query``."""
        return self.process_query(
            "Convert this natural language request into a specific CLI command "
            f"using the agentic CLI tool: {query}"
        )

    def _process_openai_query(self, query: str) -> str:
        if self.api_key is None:
            return self.fallback_response(query)

        payload = {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": self.system_prompt()},
                {"role": "user", "content": query},
            ],
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
        }
        log.debug("Sending request to OpenAI API")
        try:
            response = self._session.post(
                OPENAI_CHAT_URL,
                json=payload,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise AgentError(f"OpenAI request failed: {exc}") from exc

        if not response.ok:
            log.warning("OpenAI API error: %s", response.text)
            raise AgentError(f"OpenAI API error: {response.text}")

        try:
            choices = response.json()["choices"]
            if not choices:
                raise AgentError("No response from OpenAI API")
            return choices[0]["message"]["content"]
        except (ValueError, KeyError, TypeError, IndexError) as exc:
            raise AgentError(f"Failed to parse OpenAI response: {exc}") from exc

    def _process_ollama_query(self, query: str) -> str:
        client = self.ollama_client
        if client is None:
            log.info("Ollama client not initialized, using enhanced fallback")
            return self.ollama_fallback_response(query)

        if not client.health_check():
            log.warning("Ollama service not available, using fallback")
            return self.ollama_fallback_response(query)

        messages = [ChatMessage.system(self.system_prompt()), ChatMessage.user(query)]
        try:
            reply = client.chat(messages)
        except OllamaError as exc:
            log.warning("phi4 model error: %s", exc)
            return self.ollama_fallback_response(query)
        log.info("phi4 model responded successfully")
        return reply.strip()

    def system_prompt(self) -> str:
        return _SYSTEM_PROMPT

    def fallback_response(self, query: str) -> str:
        """Keyword-based answer used when no OpenAI key is available."""
        q = query.lower()
        if "task" in q and "add" in q:
            return (
                "To add a task, use: agentic task add --title 'Your task title' "
                "--priority [low|medium|high]"
            )
        if "task" in q and "list" in q:
            return "To list tasks, use: agentic task list"
        if "prep" in q and "start" in q:
            return (
                "To start a preparation session, use: agentic prep start "
                "--exam [exam_name]"
            )
        if "blog" in q:
            return "For blog commands, use: agentic blog --help"
        return (
            "I'd love to help, but I need an OpenAI API key to provide intelligent responses.\n"
            "Please set the OPENAI_API_KEY environment variable or add it to your config.\n"
            "\n"
            "For now, here are some basic commands you can try:\n"
            "- agentic task add --title 'Your task'\n"
            "- agentic prep start --exam CET\n"
            "- agentic blog new --title 'Your blog post'\n"
            "- agentic run 'your command here'\n"
            "\n"
            f"Your query: {query}"
        )

    def ollama_fallback_response(self, query: str) -> str:
        """Keyword-based answer used when the Ollama server cannot answer."""
        q = query.lower()

        if "study" in q and "plan" in q:
            return (
                "📚 **Study Plan Suggestion**\n\n"
                "Based on your request for a study plan, here's a structured approach:\n\n"
                "**This Week's Schedule:**\n"
                "• Monday: Review fundamentals and create task list\n"
                "• Tuesday-Thursday: Focus on core topics (2-3 hours daily)\n"
                "• Friday: Practice problems and assessments\n"
                "• Weekend: Review, summarize, and prepare for next week\n\n"
                "**Suggested Commands:**\n"
                "• Create tasks: `agentic task add --title 'Study Topic X' --priority high`\n"
                "• Start prep session: `agentic prep start --exam [YOUR_EXAM] --duration 120`\n"
                "• Track progress: `agentic prep stats --period week`\n\n"
                "**💡 Tip:** Install Ollama for unlimited AI assistance!\n"
                "Run: `ollama pull gemma3` to get started with free AI support."
            )

        if "task" in q:
            if "add" in q or "create" in q:
                return (
                    "📝 To add a task: `agentic task add --title 'Your task' "
                    "--priority [low|medium|high] --description 'Optional description'`"
                )
            if "list" in q or "show" in q:
                return (
                    "📋 To list tasks: `agentic task list` "
                    "(add --status todo/in-progress/done for filtering)"
                )

        if "prep" in q or "exam" in q:
            return (
                "🎯 For exam preparation: `agentic prep start --exam [EXAM_NAME] "
                "--schedule daily`\n"
                "Then add topics: `agentic prep add --topic 'Your Topic' --priority 5`"
            )

        if "blog" in q or "write" in q:
            return (
                "✍️ For blogging: `agentic blog new --title 'Your Title' "
                "--tags topic1,topic2`\n"
                "Edit: `agentic blog edit --post-id [ID]`"
            )

        if "productivity" in q or "organize" in q:
            return (
                "🚀 **Productivity Boost**\n\n"
                "Here's your productivity toolkit:\n"
                "• `agentic task add --title 'Daily Goals' --priority high`\n"
                "• `agentic prep start --exam 'Personal Development'`\n"
                "• `agentic blog new --title 'Progress Journal'`\n\n"
                "**🔥 Pro Tip:** For unlimited AI assistance, install Ollama!\n"
                "Download it from the Ollama website and run `ollama pull gemma3`"
            )

        return (
            "🤖 **AI Assistant (Free Mode)**\n\n"
            "I'm running in free mode with enhanced pattern matching. "
            "For unlimited AI responses:\n\n"
            "**Option 1: Install Ollama (Recommended - Free & Unlimited)**\n"
            "1. Download Ollama from its website\n"
            "2. Run: `ollama pull gemma3`\n"
            "3. Restart agentic CLI for automatic AI support\n\n"
            "**Option 2: Use OpenAI**\n"
            "Add your API key to the config file\n\n"
            f"**Your Query:** {query}\n\n"
            "**Quick Commands:**\n"
            "• Tasks: `agentic task add --title 'Your task'`\n"
            "• Study: `agentic prep start --exam CET`\n"
            "• Blog: `agentic blog new --title 'Post title'`\n"
            "• Run: `agentic run 'any command'`"
        )