"""Monitoring configuration for the application."""
from prometheus_client import Counter, Gauge, Histogram

# User metrics
registered_users = Counter(
    "poliglot_registered_users_total",
    "Total number of users who registered",
)

logins = Counter(
    "poliglot_logins_total",
    "Total number of login attempts",
    ["outcome"],
)

# Catalog metrics
catalog_words = Gauge(
    "poliglot_catalog_words",
    "Number of words loaded into the catalog",
    ["partition"],
)

# Learning metrics
sessions_started = Counter(
    "poliglot_sessions_started_total",
    "Total number of learning sessions started",
    ["activity"],
)

sessions_completed = Counter(
    "poliglot_sessions_completed_total",
    "Total number of learning sessions completed",
    ["activity"],
)

words_learned = Counter(
    "poliglot_words_learned_total",
    "Total number of word ids committed as learned",
    ["mode"],
)

# Quiz metrics
quiz_answers = Counter(
    "poliglot_quiz_answers_total",
    "Total number of quiz answers",
    ["outcome"],
)

quiz_score_ratio = Histogram(
    "poliglot_quiz_score_ratio",
    "Share of correct answers in finished quizzes",
    buckets=[0.2, 0.4, 0.6, 0.8, 1.0],
)

# Backend metrics
backend_errors = Counter(
    "poliglot_backend_errors_total",
    "Total number of user backend errors",
    ["operation"],
)
