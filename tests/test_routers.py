from __future__ import annotations

import io

import pytest
from fastapi import HTTPException
from starlette.datastructures import UploadFile

from app.api.endpoints import chapter_router, dialogue_router, sentence_router, vocabulary_router
from app.models.dialogue_model import Dialogue
from app.models.sentence_model import Sentence
from app.models.vocabulary_model import Vocabulary
from app.schemas.chapter_schema import ChapterCreate, ChapterUpdate
from app.schemas.dialogue_schema import DialogueCreate, DialogueWithSentences
from app.schemas.sentence_schema import SentenceCreate, SentenceUpdate
from app.schemas.vocabulary_schema import VocabularyBatchItem, VocabularyOut
from app.services.chapter_service import ChapterService
from app.services.dialogue_service import DialogueService
from app.services.sentence_service import SentenceService
from app.services.vocabulary_service import VocabularyService
from tests.utils import create_chapter, create_chapter_graph, create_dialogue, create_sentence, create_vocabulary


@pytest.fixture()
def chapters(repository):
    return ChapterService(repository)


@pytest.fixture()
def vocabularies(repository, upload_storage):
    return VocabularyService(repository, upload_storage)


@pytest.fixture()
def dialogues(repository):
    return DialogueService(repository)


@pytest.fixture()
def sentences(repository):
    return SentenceService(repository)


def _create_vocabulary(service, **fields):
    form = {"chinese": "", "pinyin": "", "meaning": "", "chapter_id": "", "image_url": "", "image": None}
    form.update(fields)
    return vocabulary_router.create_vocabulary(service=service, **form)


def _update_vocabulary(service, vocabulary_id, **fields):
    form = {"chinese": None, "pinyin": None, "meaning": None, "image_url": None, "image": None}
    form.update(fields)
    return vocabulary_router.update_vocabulary(vocabulary_id, service=service, **form)


# --- Chapitres ---
def test_chapter_crud_round(chapters):
    created = chapter_router.create_chapter(ChapterCreate(name="HSK 1", description="Débutant"), service=chapters)
    assert [c.id for c in chapter_router.list_chapters(service=chapters)] == [created.id]

    updated = chapter_router.update_chapter(created.id, ChapterUpdate(name="HSK 1", description="Niveau 1"), service=chapters)
    assert updated.description == "Niveau 1"

    result = chapter_router.delete_chapter(created.id, service=chapters)
    assert result.message == "Chapter deleted"
    assert result.chapters == 1


def test_update_unknown_chapter_returns_404(chapters):
    with pytest.raises(HTTPException) as exc:
        chapter_router.update_chapter(999, ChapterUpdate(name="x"), service=chapters)
    assert exc.value.status_code == 404
    assert exc.value.detail == "chapter_not_found"


def test_delete_chapter_reports_cascade_counts(repository, chapters):
    chapter = create_chapter_graph(repository, vocab=2, dialogues=2, sentences=2)

    result = chapter_router.delete_chapter(chapter.id, service=chapters)

    assert (result.vocabularies, result.dialogues, result.sentences) == (2, 2, 4)
    assert repository.count(Sentence) == 0


# --- Vocabulaire ---
def test_create_vocabulary_requires_chinese_and_chapter(vocabularies):
    with pytest.raises(HTTPException) as exc:
        _create_vocabulary(vocabularies, chinese="猫")
    assert exc.value.status_code == 400
    assert exc.value.detail == "chinese_and_chapter_id_required"


def test_create_vocabulary_rejects_non_numeric_chapter(vocabularies):
    with pytest.raises(HTTPException) as exc:
        _create_vocabulary(vocabularies, chinese="猫", chapter_id="abc")
    assert exc.value.status_code == 400
    assert exc.value.detail == "invalid_chapter_id"


def test_create_vocabulary_rejects_non_positive_chapter(vocabularies):
    with pytest.raises(HTTPException) as exc:
        _create_vocabulary(vocabularies, chinese="猫", chapter_id="0")
    assert exc.value.status_code == 400
    assert exc.value.detail == "invalid_chapter_id"


def test_create_vocabulary_reports_the_invalid_field(vocabularies, repository):
    chapter = create_chapter(repository)
    with pytest.raises(HTTPException) as exc:
        _create_vocabulary(vocabularies, chinese="字" * 300, chapter_id=str(chapter.id))
    assert exc.value.status_code == 400
    assert exc.value.detail == "invalid_chinese"
    assert repository.count(Vocabulary) == 0


def test_update_vocabulary_with_too_long_chinese_returns_400(vocabularies, repository):
    chapter = create_chapter(repository)
    vocabulary = create_vocabulary(repository, chapter, chinese="狗")

    with pytest.raises(HTTPException) as exc:
        _update_vocabulary(vocabularies, vocabulary.id, chinese="字" * 300)

    assert exc.value.status_code == 400
    assert exc.value.detail == "invalid_chinese"
    assert repository.get(Vocabulary, vocabulary.id).chinese == "狗"


def test_create_vocabulary_under_missing_chapter_returns_404(vocabularies, repository):
    with pytest.raises(HTTPException) as exc:
        _create_vocabulary(vocabularies, chinese="猫", chapter_id="42")
    assert exc.value.status_code == 404
    assert repository.count(Vocabulary) == 0


def test_create_vocabulary_with_uploaded_image(vocabularies, repository):
    chapter = create_chapter(repository)
    image = UploadFile(file=io.BytesIO(b"img"), filename="cat.png")

    vocabulary = _create_vocabulary(
        vocabularies,
        chinese="猫",
        pinyin="māo",
        chapter_id=str(chapter.id),
        image_url="http://img/ignored.png",
        image=image,
    )

    assert vocabulary.image_url == "http://testserver/uploads/1700000000_cat.png"
    assert VocabularyOut.model_validate(vocabulary).chapter_id == chapter.id


def test_unnamed_upload_part_is_ignored(vocabularies, repository):
    chapter = create_chapter(repository)
    empty_part = UploadFile(file=io.BytesIO(b""), filename="")

    vocabulary = _create_vocabulary(
        vocabularies, chinese="猫", chapter_id=str(chapter.id), image_url="http://img/cat.png", image=empty_part
    )

    assert vocabulary.image_url == "http://img/cat.png"


def test_update_vocabulary_treats_empty_fields_as_unchanged(vocabularies, repository):
    chapter = create_chapter(repository)
    vocabulary = create_vocabulary(repository, chapter, chinese="狗", pinyin="gǒu", meaning="dog")

    updated = _update_vocabulary(
        vocabularies, vocabulary.id, chinese="", pinyin="", meaning="", image_url="http://img/dog.png"
    )

    assert (updated.chinese, updated.pinyin, updated.meaning) == ("狗", "gǒu", "dog")
    assert updated.image_url == "http://img/dog.png"


def test_update_unknown_vocabulary_returns_404(vocabularies):
    with pytest.raises(HTTPException) as exc:
        _update_vocabulary(vocabularies, 555, pinyin="x")
    assert exc.value.status_code == 404


def test_batch_create_empty_returns_400(vocabularies, repository):
    chapter = create_chapter(repository)
    with pytest.raises(HTTPException) as exc:
        chapter_router.batch_create_vocabularies(chapter.id, [], service=vocabularies)
    assert exc.value.status_code == 400
    assert exc.value.detail == "empty_inputs"
    assert repository.count(Vocabulary) == 0


def test_batch_create_and_list(vocabularies, repository):
    chapter = create_chapter(repository)
    items = [VocabularyBatchItem(chinese="一"), VocabularyBatchItem(chinese="二", pinyin="èr")]

    created = chapter_router.batch_create_vocabularies(chapter.id, items, service=vocabularies)
    listed = chapter_router.list_chapter_vocabularies(chapter.id, service=vocabularies)

    assert [v.id for v in listed] == [v.id for v in created]
    assert listed[1].pinyin == "èr"


def test_delete_vocabulary_is_idempotent(vocabularies, repository):
    chapter = create_chapter(repository)
    vocabulary = create_vocabulary(repository, chapter)
    vocabulary_id = vocabulary.id

    assert vocabulary_router.delete_vocabulary(vocabulary_id, service=vocabularies).vocabularies == 1
    assert vocabulary_router.delete_vocabulary(vocabulary_id, service=vocabularies).vocabularies == 0


# --- Dialogues et phrases ---
def test_dialogue_routes(dialogues, sentences, repository):
    chapter = create_chapter(repository)
    dialogue = chapter_router.create_dialogue(chapter.id, DialogueCreate(title="Salutations"), service=dialogues)
    dialogue_router.create_sentence(dialogue.id, SentenceCreate(chinese="再见", order=2), service=sentences)
    dialogue_router.create_sentence(dialogue.id, SentenceCreate(chinese="你好", order=1), service=sentences)

    listed = chapter_router.list_chapter_dialogues(chapter.id, service=dialogues)
    payload = DialogueWithSentences.model_validate(listed[0])

    assert payload.title == "Salutations"
    assert [s.chinese for s in payload.sentences] == ["你好", "再见"]

    result = dialogue_router.delete_dialogue(dialogue.id, service=dialogues)
    assert (result.dialogues, result.sentences) == (1, 2)
    assert repository.count(Dialogue) == 0


def test_create_dialogue_under_missing_chapter_returns_404(dialogues):
    with pytest.raises(HTTPException) as exc:
        chapter_router.create_dialogue(404, DialogueCreate(title="x"), service=dialogues)
    assert exc.value.status_code == 404


def test_sentence_routes(sentences, repository):
    chapter = create_chapter(repository)
    dialogue = create_dialogue(repository, chapter)
    sentence_id = create_sentence(repository, dialogue, order=3, speaker="A").id

    updated = sentence_router.update_sentence(sentence_id, SentenceUpdate(speaker="B", order=0), service=sentences)
    assert (updated.speaker, updated.order, updated.chinese) == ("B", 0, "")

    assert sentence_router.delete_sentence(sentence_id, service=sentences).sentences == 1
    with pytest.raises(HTTPException) as exc:
        sentence_router.get_sentence(sentence_id, service=sentences)
    assert exc.value.status_code == 404
