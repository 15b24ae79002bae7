"""Nest votes and comments under their topics."""

from flat_join import OrphanedRecordError, create_joiner, starts_with


ENTRIES = [
    {"type": "topic", "id": "t1", "title": "First"},
    {"type": "vote", "id": "t1-v1", "value": 1},
    {"type": "comment", "id": "t1-c1", "text": "Hi"},
    {"type": "topic", "id": "t2", "title": "Second"},
    {"type": "vote", "id": "t2-v1", "value": 2},
]
FIELDS = {"vote": "votes", "comment": "comments"}


def main() -> None:
    """Join a grouped response, then show both orphan policies."""
    join = create_joiner(identifier_field="id", discriminator_field="type", matches=starts_with)
    for topic in join(ENTRIES, "topic", FIELDS):
        print(f"{topic['title']}: {len(topic['votes'])} votes, {len(topic['comments'])} comments")

    print("drop:", join(ENTRIES[1:], "topic", FIELDS))

    strict = create_joiner(identifier_field="id", discriminator_field="type", matches=starts_with, on_orphan="fail")
    try:
        _ = strict(ENTRIES[1:], "topic", FIELDS)
    except OrphanedRecordError as exc:
        print("fail:", exc.as_dict())


if __name__ == "__main__":
    main()
