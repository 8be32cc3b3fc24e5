import json
from typing import TYPE_CHECKING, Any, Mapping

from .document import ID_FIELD, REVISION_FIELD, Document
from .errors import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    SaveConflictError,
    SaveError,
    SetteeError,
)
from .http import POST, HttpRequest
from .log import logger
from .record import Record
from .types import DatabaseResponse, OkResponse
from .view import AllDocsResult, ViewResult, encode_view_options

if TYPE_CHECKING:
    from .connection import Connection

DESIGN_PREFIX = "_design/"


class Database(Record):
    name: str

    def __init__(
        self,
        connection: "Connection",
        name: str,
        data: Mapping[str, Any] | None = None,
    ):
        self.name = name
        super().__init__(connection, data)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"<Database {self.name!r}>"

    def hydrate(self, source: Mapping[str, Any]) -> None:
        super().hydrate(source)
        if "db_name" in source:
            self.name = source["db_name"]

    @property
    def document_count(self) -> int | None:
        return self._data.get("doc_count")

    @property
    def update_sequence(self) -> Any:
        return self._data.get("update_seq")

    def create(self) -> "Database":
        self.connection.create_database(self.name)
        return self

    def destroy(self) -> OkResponse:
        return self.connection.delete_database(self.name)

    def refresh(self) -> DatabaseResponse:
        body: DatabaseResponse = self.connection.get(self.name)
        self.hydrate(body)
        return body

    def new_document(self, fields: Mapping[str, Any] | None = None) -> Document:
        return Document(self, fields)

    def create_document(self, doc: Document) -> None:
        """Store a new document.

        With an id the document is PUT under that id, otherwise it is POSTed
        and the server picks one. On success `_id` and `_rev` are set on
        `doc`; on failure `doc` is left untouched and SaveError is raised.
        """
        values = doc.dehydrate()
        values.pop(ID_FIELD, None)

        try:
            if doc.id:
                result = self.connection.put(self.name, doc.id, body=values)
            else:
                result = self.connection.post(self.name, body=values)
        except SetteeError as e:
            raise SaveError(f"could not create document in {self.name}: {e}", e) from e

        if not isinstance(result, Mapping) or result.get("ok") is not True:
            raise SaveError(f"server did not confirm creation in {self.name}: {result!r}")
        if not result.get("id") or not result.get("rev"):
            raise SaveError(f"creation in {self.name} returned no id or revision: {result!r}")

        doc.hydrate({ID_FIELD: result["id"], REVISION_FIELD: result["rev"]})
        doc.database = self
        doc.mark_clean()
        logger.debug(f"created {doc} at {doc.rev}")

    def retrieve_document(self, id: str, revision: str | None = None) -> Document:
        result = self.connection.get(self.name, id, options={"rev": revision})
        if not isinstance(result, Mapping) or ID_FIELD not in result:
            raise NotFoundError(None, "not_found", f"no document {id} in {self.name}")

        doc = self.new_document()
        doc.hydrate(result)
        return doc

    def retrieve_attachment(
        self, name: str, id: str | Document, revision: str | None = None
    ) -> bytes:
        if isinstance(id, Document):
            if revision is None:
                revision = id.rev
            id = id.id
        if not id:
            raise InvalidArgumentError("attachment requires a document id")

        return self.connection.get(
            self.name, id, name, options={"rev": revision}, decode=False
        )

    def update_document(self, doc: Document) -> None:
        """Write the full document back. The `_rev` it carries must be the
        current one on the server or SaveConflictError is raised.
        """
        if not doc.id:
            raise InvalidArgumentError("cannot update a document without an id")

        try:
            result = self.connection.put(self.name, doc.id, body=doc.dehydrate())
        except ConflictError as e:
            raise SaveConflictError(f"document {doc.id} has been updated since {doc.rev}", e) from e
        except SetteeError as e:
            raise SaveError(f"could not update {doc.id} in {self.name}: {e}", e) from e

        if not isinstance(result, Mapping) or result.get("ok") is not True:
            raise SaveError(f"server did not confirm update of {doc.id}: {result!r}")
        if not result.get("rev"):
            raise SaveError(f"update of {doc.id} returned no revision: {result!r}")

        doc.rev = result["rev"]
        doc.mark_clean()
        logger.debug(f"updated {doc} to {doc.rev}")

    def delete_document(self, doc: Document) -> OkResponse:
        if not isinstance(doc, Document):
            raise InvalidArgumentError(f"expected a Document, got {type(doc).__name__}")
        if not doc.id or not doc.rev:
            raise InvalidArgumentError("cannot delete a document without an id and revision")

        return self.connection.delete(self.name, doc.id, headers={"If-Match": doc.rev})

    def list_documents(self, options: Mapping[str, Any] | None = None) -> AllDocsResult:
        return self.execute_view((self.name, "_all_docs"), options, AllDocsResult)

    def call_view(
        self,
        design_doc: str | Document,
        view_name: str,
        options: Mapping[str, Any] | None = None,
    ) -> ViewResult:
        if isinstance(design_doc, Document):
            design_doc = design_doc.id or ""
        design_doc = design_doc.removeprefix(DESIGN_PREFIX)

        return self.execute_view(
            (self.name, "_design", design_doc, "_view", view_name), options
        )

    def execute_view[R: ViewResult](
        self,
        segments: tuple[str, ...],
        options: Mapping[str, Any] | None = None,
        result_class: type[R] = ViewResult,
    ) -> R:
        query, body = encode_view_options(options)

        request = HttpRequest(destination=self.connection.build_uri(*segments, options=query))
        if body is not None:
            request.method = POST
            request.content = json.dumps(body, separators=(",", ":"))
            request.content_type = "application/json"

        return result_class(self, self.connection.send_request(request))
