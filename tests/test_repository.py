from __future__ import annotations

from datetime import datetime

import pytest

from app.core.errors import NotFoundError, StorageFailure
from app.models.chapter_model import Chapter
from app.models.vocabulary_model import Vocabulary
from tests.utils import create_chapter, create_vocabulary


def test_create_assigns_id_and_timestamps(repository):
    chapter = repository.create(Chapter(name="HSK 1", description="Débutant"))

    assert chapter.id is not None
    assert chapter.created_at == datetime(2024, 1, 1, 0, 0, 0)
    assert chapter.updated_at == chapter.created_at


def test_save_only_refreshes_updated_at(repository):
    chapter = create_chapter(repository, name="HSK 1")
    created_at = chapter.created_at

    chapter.description = "Nouveau"
    repository.save(chapter)

    assert chapter.created_at == created_at
    assert chapter.updated_at > created_at
    assert chapter.description == "Nouveau"


def test_get_missing_raises_not_found(repository):
    with pytest.raises(NotFoundError) as exc:
        repository.get(Chapter, 999)
    assert exc.value.code == "chapter_not_found"
    assert exc.value.status_code == 404


def test_list_filters_and_orders_by_id(repository):
    first = create_chapter(repository, name="A")
    second = create_chapter(repository, name="B")
    create_vocabulary(repository, first, chinese="一")
    create_vocabulary(repository, second, chinese="二")
    create_vocabulary(repository, first, chinese="三")

    scoped = repository.list(Vocabulary, chapter_id=first.id)
    assert [v.chinese for v in scoped] == ["一", "三"]
    assert repository.list(Vocabulary, chapter_id=12345) == []


def test_delete_returns_removed_count(repository):
    chapter = create_chapter(repository)
    vocabulary = create_vocabulary(repository, chapter)
    vocabulary_id = vocabulary.id

    assert repository.delete(Vocabulary, vocabulary_id) == 1
    assert repository.delete(Vocabulary, vocabulary_id) == 0
    assert repository.count(Vocabulary) == 0


def test_orphan_insert_is_reported_as_storage_failure(repository):
    with pytest.raises(StorageFailure):
        repository.create(Vocabulary(chinese="孤", chapter_id=404))

    # The session is usable again after the rollback.
    assert repository.count(Vocabulary) == 0


def test_atomic_rolls_back_every_write(repository):
    chapter = create_chapter(repository)
    create_vocabulary(repository, chapter, chinese="一")

    with pytest.raises(RuntimeError):
        with repository.atomic():
            repository.delete_where(Vocabulary, chapter_id=chapter.id)
            raise RuntimeError("boom")

    assert repository.count(Vocabulary, chapter_id=chapter.id) == 1


def test_atomic_commits_once_at_the_end(repository):
    chapter = create_chapter(repository)

    with repository.atomic():
        repository.create(Vocabulary(chinese="一", chapter_id=chapter.id))
        repository.create(Vocabulary(chinese="二", chapter_id=chapter.id))
        assert repository.in_transaction

    assert not repository.in_transaction
    assert repository.count(Vocabulary, chapter_id=chapter.id) == 2
