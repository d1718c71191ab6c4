"""Application services layer (session state, polling, notifications, chat).

Services coordinate work across domains and infrastructure. They should avoid
UI concerns; user-facing feedback goes through an injected toast callback.
"""
