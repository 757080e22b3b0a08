# Services package init
"""
Fake Stack Overflow Backend — Services Layer
==============================================

What:  Business logic between routes (HTTP) and the database.

Service Inventory:
    - QuestionService: posting, listings (newest/unanswered/active), tag
      filter, search, view counting
    - AnswerService: posting answers, answers of a question
    - TagService: case-insensitive tag resolution, per-tag counts
    - search: search-string parser and whole-word matching
    - validation: ask-question / answer form rules

Services take the request's AsyncSession as their first argument and keep no
state of their own; each is exposed as a module-level singleton.
"""
