"""Centralised configuration for the SQLAdmin back-office."""

from __future__ import annotations

from typing import Any

from markupsafe import Markup
from sqladmin import Admin, ModelView

from app.models.chapter_model import Chapter
from app.models.dialogue_model import Dialogue
from app.models.sentence_model import Sentence
from app.models.vocabulary_model import Vocabulary


def _image_preview(model: Vocabulary, _: Any) -> Markup:
    if not model.image_url:
        return Markup("<span style='color:#9ca3af;'>—</span>")
    return Markup(
        "<img src='{}' alt='' style='max-height:48px; max-width:96px; object-fit:contain;'>"
    ).format(model.image_url)


class ChapterAdmin(ModelView, model=Chapter):
    name = "Chapitre"
    name_plural = "Chapitres"
    icon = "fa-solid fa-book"
    column_list = [Chapter.id, Chapter.name, Chapter.description, Chapter.updated_at]
    column_searchable_list = [Chapter.name]
    column_sortable_list = [Chapter.id, Chapter.name, Chapter.updated_at]
    form_excluded_columns = [Chapter.vocabularies, Chapter.dialogues, Chapter.created_at, Chapter.updated_at]


class VocabularyAdmin(ModelView, model=Vocabulary):
    name = "Mot"
    name_plural = "Vocabulaire"
    icon = "fa-solid fa-language"
    column_list = [
        Vocabulary.id,
        Vocabulary.chinese,
        Vocabulary.pinyin,
        Vocabulary.meaning,
        Vocabulary.image_url,
        Vocabulary.chapter,
    ]
    column_searchable_list = [Vocabulary.chinese, Vocabulary.pinyin, Vocabulary.meaning]
    column_sortable_list = [Vocabulary.id, Vocabulary.chinese, Vocabulary.chapter_id]
    column_formatters = {Vocabulary.image_url: _image_preview}
    form_excluded_columns = [Vocabulary.created_at, Vocabulary.updated_at]
    page_size = 50


class DialogueAdmin(ModelView, model=Dialogue):
    name = "Dialogue"
    name_plural = "Dialogues"
    icon = "fa-solid fa-comments"
    column_list = [Dialogue.id, Dialogue.title, Dialogue.chapter, Dialogue.updated_at]
    column_searchable_list = [Dialogue.title]
    form_excluded_columns = [Dialogue.sentences, Dialogue.created_at, Dialogue.updated_at]


class SentenceAdmin(ModelView, model=Sentence):
    name = "Phrase"
    name_plural = "Phrases"
    icon = "fa-solid fa-quote-left"
    column_list = [
        Sentence.id,
        Sentence.dialogue,
        Sentence.order,
        Sentence.speaker,
        Sentence.chinese,
        Sentence.english,
    ]
    column_sortable_list = [Sentence.id, Sentence.dialogue_id, Sentence.order]
    column_default_sort = [(Sentence.dialogue_id, False), (Sentence.order, False)]
    form_excluded_columns = [Sentence.created_at, Sentence.updated_at]


ADMIN_VIEWS = (ChapterAdmin, VocabularyAdmin, DialogueAdmin, SentenceAdmin)


def register_admin(app, engine, base_url: str = "/admin") -> Admin:
    admin = Admin(app, engine, base_url=base_url, title="ChineseLearn Admin")
    for view in ADMIN_VIEWS:
        admin.add_view(view)
    return admin
