# backend/client.py
"""Python client for the chat RPC surface and the chat window's state.

``RpcClient`` wraps one HTTP call per procedure. ``ChatSession`` holds what
the single-page UI keeps on screen: the conversation list, the selected
conversation, its message thread and the selected agent. Messages typed by
the user are shown straight away as pending entries and settled by their
temporary id once the server answers.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import uuid4

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://127.0.0.1:2022"
DEFAULT_AGENT = "general_qa"

# Display label and emoji per agent type, in selector order
AGENT_LABELS = {
    "emotional_support": ("情感支持", "💝"),
    "psychology": ("心理学", "🧠"),
    "sociology": ("社会学", "👥"),
    "general_qa": ("常识问答", "💡"),
    "meal_planning": ("饮食规划", "🍽️"),
    "travel_planning": ("旅行规划", "✈️"),
}

PENDING = "pending"
CONFIRMED = "confirmed"
FAILED = "failed"


class RpcError(Exception):
    """Non-2xx answer from the server."""

    def __init__(self, status_code: int, detail: Any):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class RpcClient:
    def __init__(self, base_url: str = DEFAULT_BASE_URL, http=None, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        # Anything with requests-style get/post works here (e.g. a TestClient)
        self.http = http or requests.Session()
        self.timeout = timeout

    def _url(self, procedure: str) -> str:
        return f"{self.base_url}/rpc/{procedure}"

    def _unwrap(self, r):
        if r.status_code >= 400:
            try:
                detail = r.json().get("detail")
            except ValueError:
                detail = r.text
            raise RpcError(r.status_code, detail)
        return r.json()

    def _query(self, procedure: str, **params):
        r = self.http.get(self._url(procedure), params=params, timeout=self.timeout)
        return self._unwrap(r)

    def _mutate(self, procedure: str, payload: Dict[str, Any]):
        r = self.http.post(self._url(procedure), json=payload, timeout=self.timeout)
        return self._unwrap(r)

    # ─── Procedures ───────────────────────────────────────────────────────────
    def healthcheck(self) -> Dict[str, Any]:
        return self._query("healthcheck")

    def create_user(self, username: str, email: str) -> Dict[str, Any]:
        return self._mutate("createUser", {"username": username, "email": email})

    def create_conversation(self, user_id: int, title: Optional[str] = None) -> Dict[str, Any]:
        return self._mutate("createConversation", {"user_id": user_id, "title": title})

    def get_conversations(self, user_id: int) -> List[Dict[str, Any]]:
        return self._query("getConversations", user_id=user_id)

    def update_conversation_title(self, conversation_id: int, title: str) -> Dict[str, Any]:
        return self._mutate(
            "updateConversationTitle",
            {"conversation_id": conversation_id, "title": title},
        )

    def send_message(
        self, conversation_id: int, content: str, ai_agent_type: Optional[str] = None
    ) -> Dict[str, Any]:
        payload = {"conversation_id": conversation_id, "content": content}
        if ai_agent_type is not None:
            payload["ai_agent_type"] = ai_agent_type
        return self._mutate("sendMessage", payload)

    def get_messages(self, conversation_id: int) -> List[Dict[str, Any]]:
        return self._query("getMessages", conversation_id=conversation_id)


@dataclass
class ThreadEntry:
    key: str
    message: Dict[str, Any]
    status: str = CONFIRMED


class ChatSession:
    def __init__(self, client: RpcClient, user_id: int, agent_type: str = DEFAULT_AGENT):
        self.client = client
        self.user_id = user_id
        self.selected_agent = agent_type
        self.conversations: List[Dict[str, Any]] = []
        self.current: Optional[Dict[str, Any]] = None
        self.entries: List[ThreadEntry] = []

    @property
    def messages(self) -> List[Dict[str, Any]]:
        """The visible thread: pending and confirmed entries in order."""
        return [e.message for e in self.entries if e.status != FAILED]

    def entry(self, key: str) -> Optional[ThreadEntry]:
        for e in self.entries:
            if e.key == key:
                return e
        return None

    # Load and create failures are logged and leave the session as it was
    def load_conversations(self) -> List[Dict[str, Any]]:
        try:
            self.conversations = self.client.get_conversations(self.user_id)
        except (RpcError, requests.RequestException) as e:
            logger.error("Failed to load conversations: %s", e)
            return self.conversations
        if self.conversations and self.current is None:
            self.select(self.conversations[0])
        return self.conversations

    def select(self, conversation: Dict[str, Any]):
        self.current = conversation
        self.load_messages()

    def load_messages(self):
        if self.current is None:
            self.entries = []
            return
        try:
            messages = self.client.get_messages(self.current["id"])
        except (RpcError, requests.RequestException) as e:
            logger.error("Failed to load messages: %s", e)
            return
        self.entries = [ThreadEntry(key=f"server-{m['id']}", message=m) for m in messages]

    def new_conversation(self) -> Optional[Dict[str, Any]]:
        try:
            conv = self.client.create_conversation(
                self.user_id, f"新对话 {len(self.conversations) + 1}"
            )
        except (RpcError, requests.RequestException) as e:
            logger.error("Failed to create conversation: %s", e)
            return None
        self.conversations = [conv] + self.conversations
        self.current = conv
        self.entries = []
        return conv

    def rename(self, title: str) -> Dict[str, Any]:
        if self.current is None:
            raise ValueError("No conversation selected")
        conv = self.client.update_conversation_title(self.current["id"], title)
        self.conversations = [conv] + [c for c in self.conversations if c["id"] != conv["id"]]
        self.current = conv
        return conv

    def send(self, text: str, agent_type: Optional[str] = None) -> str:
        """Send ``text`` and return what the input box should hold afterwards.

        Blank input or no selected conversation leaves everything untouched.
        On failure the pending entry is marked failed, dropped from the
        visible thread and the text is handed back for the input box.
        """
        content = text.strip()
        if not content or self.current is None:
            return text

        conversation_id = self.current["id"]
        key = uuid4().hex
        self.entries.append(ThreadEntry(
            key=key,
            message={
                "id": None,
                "conversation_id": conversation_id,
                "role": "user",
                "content": content,
                "ai_agent_type": None,
                "created_at": datetime.utcnow().isoformat(),
            },
            status=PENDING,
        ))

        try:
            reply = self.client.send_message(
                conversation_id, content, agent_type or self.selected_agent
            )
        except (RpcError, requests.RequestException) as e:
            logger.error("Failed to send message: %s", e)
            self._settle(key, FAILED)
            return content

        self._settle(key, CONFIRMED, reply)
        return ""

    def _settle(self, key: str, status: str, reply: Optional[Dict[str, Any]] = None):
        for i, e in enumerate(self.entries):
            if e.key != key:
                continue
            self.entries[i] = ThreadEntry(key=key, message=e.message, status=status)
            if reply is not None:
                self.entries.insert(i + 1, ThreadEntry(key=f"server-{reply['id']}", message=reply))
            return
