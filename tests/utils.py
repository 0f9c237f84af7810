"""Utility helpers for test factories."""

from __future__ import annotations

from app.crud.repository import Repository
from app.models.chapter_model import Chapter
from app.models.dialogue_model import Dialogue
from app.models.sentence_model import Sentence
from app.models.vocabulary_model import Vocabulary


def create_chapter(repository: Repository, name: str = "Chapitre 1", **kwargs) -> Chapter:
    defaults = {"name": name, "description": kwargs.pop("description", "")}
    defaults.update(kwargs)
    return repository.create(Chapter(**defaults))


def create_vocabulary(repository: Repository, chapter: Chapter, chinese: str = "猫", **kwargs) -> Vocabulary:
    defaults = {
        "chinese": chinese,
        "pinyin": "māo",
        "meaning": "cat",
        "image_url": "",
        "chapter_id": chapter.id,
    }
    defaults.update(kwargs)
    return repository.create(Vocabulary(**defaults))


def create_dialogue(repository: Repository, chapter: Chapter, title: str = "Au restaurant", **kwargs) -> Dialogue:
    defaults = {"title": title, "description": "", "chapter_id": chapter.id}
    defaults.update(kwargs)
    return repository.create(Dialogue(**defaults))


def create_sentence(repository: Repository, dialogue: Dialogue, order: int = 0, **kwargs) -> Sentence:
    defaults = {
        "dialogue_id": dialogue.id,
        "speaker": "A",
        "chinese": "你好",
        "pinyin": "nǐ hǎo",
        "english": "hello",
        "audio_url": "",
        "order": order,
    }
    defaults.update(kwargs)
    return repository.create(Sentence(**defaults))


def create_chapter_graph(repository: Repository, name: str = "Chapitre 1", vocab: int = 2, dialogues: int = 2, sentences: int = 3):
    """Chapter with ``vocab`` entries and ``dialogues`` dialogues of ``sentences`` sentences each."""

    chapter = create_chapter(repository, name=name)
    for index in range(vocab):
        create_vocabulary(repository, chapter, chinese=f"{name}-词{index}")
    for d_index in range(dialogues):
        dialogue = create_dialogue(repository, chapter, title=f"{name}-对话{d_index}")
        for s_index in range(sentences):
            create_sentence(repository, dialogue, order=s_index)
    return chapter
