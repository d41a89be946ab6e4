"""In-memory document sessions.

A session holds the content of one uploaded document together with the
fields identified in it. Content is rewritten through the pure rewriter and
written back explicitly; nothing else mutates it.
"""

import logging
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal

from docfill.interfaces.fields import (
    AnalysisParseError,
    BaseFieldDetector,
    BasePlaceholderRewriter,
    NoFieldsError,
    SessionNotFoundError,
)
from docfill.strategies.fields.analysis_parser import parse_analysis_response
from docfill.strategies.fields.detector import PatternFieldDetector
from docfill.strategies.fields.models import FieldDescriptor
from docfill.strategies.fields.rewriter import PlaceholderRewriter

logger = logging.getLogger(__name__)

RewriteTarget = Literal["text", "html"]


@dataclass
class DocumentSession:
    """State for one document being edited.

    Attributes:
        id: Session identifier.
        filename: Name of the uploaded file.
        text: Plain text; positional fields index into this buffer.
        html: Markup shown to the user.
        fields: Fields identified so far.
        created_at: When the session was opened.
    """

    filename: str
    text: str
    html: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    fields: list[FieldDescriptor] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    detector: BaseFieldDetector = field(default_factory=PatternFieldDetector, repr=False)
    rewriter: BasePlaceholderRewriter = field(default_factory=PlaceholderRewriter, repr=False)

    def detect_fields(self) -> list[FieldDescriptor]:
        """Run pattern detection over the session text and keep the result."""
        self.fields = list(self.detector.detect(self.text))
        logger.info(f"Session {self.id}: detected {len(self.fields)} fields")
        return self.fields

    def set_fields(self, fields: list[FieldDescriptor]) -> None:
        """Replace the identified fields."""
        self.fields = list(fields)

    def apply_analysis(self, raw: str) -> list[FieldDescriptor]:
        """Adopt the fields from a model analysis reply.

        Raises:
            AnalysisParseError: If the reply is unusable. Current fields are
                left as they were.
        """
        try:
            fields = parse_analysis_response(raw)
        except AnalysisParseError:
            logger.warning(f"Session {self.id}: discarding unparseable analysis result")
            raise
        self.set_fields(fields)
        logger.info(f"Session {self.id}: analysis identified {len(fields)} fields")
        return self.fields

    def apply_placeholders(self, target: RewriteTarget = "html") -> str:
        """Rewrite the chosen content with the current fields and store it.

        Positional spans are only valid for ``text``; markup is rewritten in
        name-matching mode.

        Raises:
            NoFieldsError: If no fields have been identified yet.
            ValueError: If ``target`` is unknown.
        """
        if not self.fields:
            raise NoFieldsError("No fields identified; detect or analyze first")

        if target == "text":
            self.text = self.rewriter.rewrite(self.text, self.fields)
            # Spans referred to the previous buffer.
            self.fields = [f.without_position() for f in self.fields]
            result = self.text
        elif target == "html":
            fields = [f.without_position() for f in self.fields]
            self.html = self.rewriter.rewrite(self.html, fields)
            result = self.html
        else:
            raise ValueError(f"Unknown rewrite target: {target}")

        logger.info(f"Session {self.id}: applied {len(self.fields)} placeholders to {target}")
        return result


class SessionStore:
    """Process-local registry of document sessions.

    Holds at most ``max_sessions`` sessions; opening one more closes the
    least recently used.
    """

    def __init__(self, max_sessions: int = 100) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[uuid.UUID, DocumentSession] = OrderedDict()

    def create(self, filename: str, text: str, html: str) -> DocumentSession:
        session = DocumentSession(filename=filename, text=text, html=html)
        self._sessions[session.id] = session
        logger.info(f"Opened session {session.id} for {filename}")

        while len(self._sessions) > self._max_sessions:
            evicted_id, _ = self._sessions.popitem(last=False)
            logger.info(f"Evicted idle session {evicted_id}")
        return session

    def get(self, session_id: uuid.UUID) -> DocumentSession:
        """Return a session and mark it as recently used.

        Raises:
            SessionNotFoundError: If the id is unknown.
        """
        try:
            session = self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(f"Document session not found: {session_id}") from None
        self._sessions.move_to_end(session_id)
        return session

    def delete(self, session_id: uuid.UUID) -> None:
        """Discard a session and its fields.

        Raises:
            SessionNotFoundError: If the id is unknown.
        """
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(f"Document session not found: {session_id}")
        logger.info(f"Closed session {session_id}")

    def __len__(self) -> int:
        return len(self._sessions)
