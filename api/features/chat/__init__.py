"""Chat feature package: entities, store, history projection, reply
generation, orchestration service, controller and router.

Conversations and their messages are stored through SQLAlchemy; replies are
generated through a LangChain chat model.
"""
