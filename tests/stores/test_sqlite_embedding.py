"""Tests for the SQLite embedding store."""

from ponder.models import Embedding, IndexingStatus, IndexState
from ponder.stores.base import EmbeddingStore


class TestEmbeddings:
    def test_is_embedding_store(self, embedding_store):
        assert isinstance(embedding_store, EmbeddingStore)

    def test_upsert_and_get(self, embedding_store):
        embedding = Embedding(question_id="q1", vector=[0.1, 0.2, 0.3], model="m")
        stored = embedding_store.upsert(embedding)

        assert stored == embedding
        assert embedding_store.get(embedding.id) == embedding
        assert embedding_store.get_by_question("q1") == embedding

    def test_missing(self, embedding_store):
        assert embedding_store.get("nope") is None
        assert embedding_store.get_by_question("nope") is None

    def test_upsert_replaces_and_keeps_id(self, embedding_store):
        first = embedding_store.upsert(Embedding(question_id="q1", vector=[1.0, 0.0], model="m1"))
        second = embedding_store.upsert(Embedding(question_id="q1", vector=[0.0, 1.0], model="m2"))

        assert second.id == first.id
        assert embedding_store.count_embeddings() == 1

        stored = embedding_store.get_by_question("q1")
        assert stored is not None
        assert stored.id == first.id
        assert stored.vector == [0.0, 1.0]
        assert stored.model == "m2"

    def test_list_embeddings(self, embedding_store):
        embedding_store.upsert(Embedding(question_id="q1", vector=[1.0], model="m", created_at=2))
        embedding_store.upsert(Embedding(question_id="q2", vector=[2.0], model="m", created_at=1))

        assert [e.question_id for e in embedding_store.list_embeddings()] == ["q2", "q1"]


class TestIndexingStatus:
    def test_unknown_question_is_unindexed(self, embedding_store):
        status = embedding_store.get_status("q1")
        assert status.question_id == "q1"
        assert status.state == IndexState.UNINDEXED
        assert status.attempts == 0

    def test_set_and_get(self, embedding_store):
        embedding_store.set_status(
            IndexingStatus(question_id="q1", state=IndexState.FAILED, attempts=4, last_error="x")
        )

        status = embedding_store.get_status("q1")
        assert status.state == IndexState.FAILED
        assert status.attempts == 4
        assert status.last_error == "x"

    def test_list_and_count_by_state(self, embedding_store):
        embedding_store.set_status(IndexingStatus(question_id="q1", updated_at=1))
        embedding_store.set_status(IndexingStatus(question_id="q2", updated_at=2))
        embedding_store.set_status(IndexingStatus(question_id="q3", state=IndexState.INDEXED))

        unindexed = embedding_store.list_by_state(IndexState.UNINDEXED)
        assert [s.question_id for s in unindexed] == ["q1", "q2"]
        assert embedding_store.list_by_state(IndexState.FAILED) == []

        counts = embedding_store.count_by_state()
        assert counts == {IndexState.UNINDEXED: 2, IndexState.INDEXED: 1, IndexState.FAILED: 0}

    def test_status_overwrites(self, embedding_store):
        embedding_store.set_status(IndexingStatus(question_id="q1"))
        embedding_store.set_status(IndexingStatus(question_id="q1", state=IndexState.INDEXED))

        assert embedding_store.get_status("q1").state == IndexState.INDEXED
        assert embedding_store.list_by_state(IndexState.UNINDEXED) == []
