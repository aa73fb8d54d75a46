"""File-backed flowchart persistence.

Stores one flowchart document as JSON at a fixed path, exports and
imports standalone ``.json`` files, builds starter templates, and
debounces rapid auto-save requests into one delayed write.
"""

from __future__ import annotations

import json
import logging
import re
import secrets
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

from pydantic import ValidationError

from flowchart_mermaid.ir.model import Edge, Graph, Metadata, Node
from flowchart_mermaid.ir.schema import DocumentModel, describe_error
from flowchart_mermaid.types import DECISION_NO, DECISION_YES, NodeCategory

logger = logging.getLogger(__name__)

CURRENT_VERSION = "1.0.0"
MAX_DOCUMENT_BYTES = 5 * 1024 * 1024

_FILENAME_UNSAFE_RE = re.compile(r"[^a-z0-9]", re.IGNORECASE)
# top-level keys whose absence or wrong shape marks a structurally invalid document
_STRUCTURAL_KEYS = {"id", "nodes", "edges", "version"}


class FlowchartStorageError(Exception):
    """Raised when a flowchart document cannot be saved, loaded, or imported."""


def generate_id() -> str:
    return f"flowchart_{int(time.time() * 1000)}_{secrets.token_hex(5)[:9]}"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class FlowchartDocument:
    id: str
    title: str
    description: str = ""
    graph: Graph = field(default_factory=Graph.new)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)
    version: str = CURRENT_VERSION

    @property
    def metadata(self) -> Metadata:
        return Metadata(title=self.title, description=self.description)

    def to_model(self) -> DocumentModel:
        graph = self.graph.to_model()
        return DocumentModel(
            id=self.id,
            title=self.title,
            description=self.description,
            nodes=graph.nodes,
            edges=graph.edges,
            created_at=self.created_at,
            updated_at=self.updated_at,
            version=self.version,
        )

    def to_dict(self) -> dict[str, Any]:
        return self.to_model().model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return self.to_model().model_dump_json(by_alias=True, exclude_none=True)

    @classmethod
    def from_model(cls, model: DocumentModel) -> FlowchartDocument:
        return cls(
            id=model.id,
            title=model.title or "",
            description=model.description or "",
            graph=Graph.from_model(model),
            created_at=model.created_at or _now(),
            updated_at=model.updated_at or _now(),
            version=model.version or "",
        )

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> FlowchartDocument:
        """Build a document from its JSON object form.

        Raises:
            ValueError: If *raw* does not validate as a flowchart document.
        """
        try:
            model = DocumentModel.model_validate(raw)
        except ValidationError as e:
            raise ValueError(f"invalid flowchart document: {describe_error(e)}") from e
        return cls.from_model(model)

    @classmethod
    def from_json(cls, text: str) -> FlowchartDocument:
        """Parse a document from JSON text.

        Raises:
            ValueError: If *text* is not valid JSON or not a document.
        """
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"invalid JSON: {e}") from e
        return cls.from_dict(raw)


def _is_structural(e: ValidationError) -> bool:
    return all(len(err["loc"]) == 1 and err["loc"][0] in _STRUCTURAL_KEYS for err in e.errors())


class FlowchartStore:
    """Single-slot document store backed by one JSON file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def save(self, graph: Graph, metadata: Metadata, existing: FlowchartDocument | None = None) -> FlowchartDocument:
        """Write *graph* and *metadata*, keeping id and creation time of *existing*.

        Raises:
            FlowchartStorageError: If the document is too large or cannot be written.
        """
        now = _now()
        doc = FlowchartDocument(
            id=existing.id if existing is not None else generate_id(),
            title=metadata.title or "",
            description=metadata.description or "",
            graph=graph,
            created_at=existing.created_at if existing is not None else now,
            updated_at=now,
            version=CURRENT_VERSION,
        )
        payload = doc.to_json()
        size = len(payload.encode("utf-8"))
        if size > MAX_DOCUMENT_BYTES:
            raise FlowchartStorageError("Flowchart data is too large to save (exceeds 5MB)")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(payload, encoding="utf-8")
        except OSError as e:
            raise FlowchartStorageError("Failed to save flowchart data") from e
        logger.debug("saved flowchart %s (%d bytes) to %s", doc.id, size, self.path)
        return doc

    def load(self) -> FlowchartDocument | None:
        """Read the stored document, or None if nothing is stored.

        A document missing its id, version, nodes or edges is reported and
        left in place; any other unreadable content is deleted first.

        Raises:
            FlowchartStorageError: If the stored data cannot be read or parsed.
        """
        if not self.path.exists():
            return None
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise FlowchartStorageError("Failed to load flowchart data") from e
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise self._discard(e) from e
        try:
            model = DocumentModel.model_validate(raw)
        except ValidationError as e:
            if _is_structural(e):
                raise FlowchartStorageError("Invalid flowchart data structure") from e
            raise self._discard(e) from e
        if not model.version:
            raise FlowchartStorageError("Invalid flowchart data structure")
        if model.version != CURRENT_VERSION:
            logger.warning("flowchart data version mismatch: expected %s, got %s", CURRENT_VERSION, model.version)
        return FlowchartDocument.from_model(model)

    def _discard(self, cause: Exception) -> FlowchartStorageError:
        logger.error("failed to load flowchart data from %s: %s", self.path, cause)
        self.path.unlink(missing_ok=True)
        return FlowchartStorageError("Failed to load flowchart data. The stored data may be corrupted.")

    def clear(self) -> None:
        """Remove the stored document.

        Raises:
            FlowchartStorageError: If the file exists but cannot be removed.
        """
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise FlowchartStorageError("Failed to clear flowchart data") from e

    def has_saved(self) -> bool:
        return self.path.is_file()


def export_filename(title: str) -> str:
    return f"{_FILENAME_UNSAFE_RE.sub('_', title).lower()}_flowchart.json"


def export_to_file(doc: FlowchartDocument, directory: str | Path) -> Path:
    """Write *doc* into *directory* under a name derived from its title.

    Raises:
        FlowchartStorageError: If the file cannot be written.
    """
    target = Path(directory) / export_filename(doc.title)
    try:
        target.write_text(doc.to_json(), encoding="utf-8")
    except OSError as e:
        raise FlowchartStorageError("Failed to export flowchart to file") from e
    return target


def import_from_file(path: str | Path) -> FlowchartDocument:
    """Read a document previously written by ``export_to_file``.

    Raises:
        FlowchartStorageError: If the file is not JSON, unreadable, or malformed.
    """
    path = Path(path)
    if path.suffix.lower() != ".json":
        raise FlowchartStorageError("Invalid file type. Please select a JSON file.")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise FlowchartStorageError("Failed to read flowchart file") from e
    try:
        return FlowchartDocument.from_json(text)
    except ValueError as e:
        raise FlowchartStorageError("Failed to import flowchart file") from e


def _chain(*pairs: tuple[str, str] | tuple[str, str, str, str]) -> list[Edge]:
    edges = []
    for pair in pairs:
        source, target = pair[0], pair[1]
        label = pair[2] if len(pair) > 2 else None
        handle = pair[3] if len(pair) > 3 else None
        edges.append(Edge(source=source, target=target, label=label, source_handle=handle, id=f"e-{source}-{target}"))
    return edges


def new_flowchart(template: str = "empty") -> FlowchartDocument:
    """Create a new document, optionally seeded from a named template.

    Templates: ``empty``, ``basic`` (start, process, end) and ``decision``
    (start, decision with yes/no branches, end). Unknown names give ``empty``.
    """
    doc = FlowchartDocument(id=generate_id(), title="New Flowchart")
    if template == "basic":
        doc.title = "Basic Process Flow"
        nodes = [
            Node.new("start-0", NodeCategory.Start, label="Start"),
            Node.new("process-1", NodeCategory.Process, label="Process Step"),
            Node.new("end-2", NodeCategory.End, label="End"),
        ]
        doc.graph = Graph(nodes=nodes, edges=_chain(("start-0", "process-1"), ("process-1", "end-2")))
    elif template == "decision":
        doc.title = "Decision Flow"
        nodes = [
            Node.new("start-0", NodeCategory.Start, label="Start"),
            Node.new("decision-1", NodeCategory.Decision, label="Decision?", yes_label="Yes", no_label="No"),
            Node.new("process-2", NodeCategory.Process, label="Yes Path"),
            Node.new("process-3", NodeCategory.Process, label="No Path"),
            Node.new("end-4", NodeCategory.End, label="End"),
        ]
        edges = _chain(
            ("start-0", "decision-1"),
            ("decision-1", "process-2", "Yes", DECISION_YES),
            ("decision-1", "process-3", "No", DECISION_NO),
            ("process-2", "end-4"),
            ("process-3", "end-4"),
        )
        doc.graph = Graph(nodes=nodes, edges=edges)
    return doc


class AutoSaveScheduler:
    """Coalesce rapid save requests into one delayed write.

    One pending timer slot: each ``request`` replaces any pending save.
    Call ``cancel`` on teardown.
    """

    def __init__(
        self,
        store: FlowchartStore,
        delay: float = 2.0,
        on_saved: Callable[[FlowchartDocument], None] | None = None,
        on_error: Callable[[FlowchartStorageError], None] | None = None,
    ) -> None:
        self.store = store
        self.delay = delay
        self.on_saved = on_saved
        self.on_error = on_error
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def request(self, graph: Graph, metadata: Metadata, existing: FlowchartDocument | None = None) -> None:
        timer = threading.Timer(self.delay, self._fire, args=(graph, metadata, existing))
        timer.daemon = True
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = timer
        timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def flush(self, graph: Graph, metadata: Metadata, existing: FlowchartDocument | None = None) -> FlowchartDocument:
        """Cancel any pending save and write immediately."""
        self.cancel()
        return self.store.save(graph, metadata, existing)

    def _fire(self, graph: Graph, metadata: Metadata, existing: FlowchartDocument | None) -> None:
        with self._lock:
            if self._timer is not threading.current_thread():
                return
            self._timer = None
        try:
            doc = self.store.save(graph, metadata, existing)
        except FlowchartStorageError as e:
            logger.warning("auto-save failed: %s", e)
            if self.on_error is not None:
                self.on_error(e)
            return
        if self.on_saved is not None:
            self.on_saved(doc)
