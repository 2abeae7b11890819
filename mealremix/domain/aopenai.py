from typing import Any, Self

import httpx


BASE_URL = "https://api.openai.com/v1/"
DEFAULT_MODEL = "gpt-4.1"
MAX_TOKENS = 500
TEMPERATURE = 0.8
TIMEOUT = 60 * 2


def openai_client(
    token: str | None,
    *,
    base_url: str = BASE_URL,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=base_url,
        headers={
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        },
        timeout=TIMEOUT,
    )


class ChatMsg:
    def __init__(self, *, role: str, content: str | None) -> None:
        self.role = role
        self.content = content

    def __repr__(self) -> str:
        return f"<ChatMsg(role={self.role})>"

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}


class Chat:
    @classmethod
    def from_system_prompt(
        cls,
        prompt: str,
        *,
        client: httpx.AsyncClient,
        model: str = DEFAULT_MODEL,
        temperature: float = TEMPERATURE,
        max_tokens: int = MAX_TOKENS,
    ) -> Self:
        messages: list[ChatMsg] = [ChatMsg(role="system", content=prompt)]
        return cls(
            client=client,
            model=model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )

    def __init__(
        self,
        *,
        client: httpx.AsyncClient,
        model: str = DEFAULT_MODEL,
        messages: list[ChatMsg] | None = None,
        temperature: float = TEMPERATURE,
        max_tokens: int = MAX_TOKENS,
    ) -> None:
        self.model = model
        self._messages: list[ChatMsg] = [] if messages is None else messages
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = client

    def to_dict(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [m.to_dict() for m in self._messages],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    async def _chat_raw(self, data: dict[str, Any]) -> list[ChatMsg]:
        resp = await self._client.post("chat/completions", json=data)
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, dict) or "error" in data:
            raise ValueError(f"Problem creating completion. {data}")
        msgs: list[ChatMsg] = []
        for c in data.get("choices") or []:
            message = c.get("message") if isinstance(c, dict) else None
            if not isinstance(message, dict):
                raise ValueError(f"Problem creating completion. Malformed choice: {c}")
            msgs.append(ChatMsg(role=message.get("role", ""), content=message.get("content")))
        return msgs

    async def send_messages(self) -> list[ChatMsg]:
        return await self._chat_raw(self.to_dict())

    async def chat(self, msg: str | ChatMsg) -> str:
        """Send `msg` and return the text of the first choice."""
        chat_msg = ChatMsg(role="user", content=msg) if isinstance(msg, str) else msg
        self._messages.append(chat_msg)
        chat_msgs = await self.send_messages()
        if not chat_msgs:
            raise ValueError("Problem creating completion. No choices returned.")
        reply = chat_msgs[0]
        self._messages.append(reply)
        if not isinstance(reply.content, str):
            raise ValueError("Non-string response content not supported.")
        return reply.content
