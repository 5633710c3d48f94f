"""Messages feature package: DTOs, repository, service, controller and routers.

Messages are appended to a single ``messages`` table and read back grouped by
``conversation_id``. There is no conversations table; a conversation is just
the set of messages sharing an id.
"""
