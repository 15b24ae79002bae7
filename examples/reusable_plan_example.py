"""Validate a child field map once and reuse it across responses."""

from flat_join import JoinConfig, KeyPrefixMatcher, UnknownKindError, create_joiner


ORDER_KINDS = {"order", "line", "payment"}


def main() -> None:
    """Join two order pages with one plan built against the known kinds."""
    keys = KeyPrefixMatcher(sep="/")
    joiner = create_joiner(JoinConfig(identifier_field="key", discriminator_field="kind", matches=keys))
    orders = joiner.plan("order", {"line": "lines", "payment": "payments"}, known_kinds=ORDER_KINDS)

    first_page = [
        {"kind": "order", "key": "o1"},
        {"kind": "line", "key": keys.child_key("o1", "l1"), "sku": "A"},
        {"kind": "payment", "key": keys.child_key("o1", "p1"), "amount": 10},
    ]
    second_page = [
        {"kind": "order", "key": "o2"},
        {"kind": "line", "key": keys.child_key("o2", "l1"), "sku": "B"},
    ]
    print(orders(first_page))
    print(orders(second_page))

    for line in orders(second_page)[0]["lines"]:
        print(f"{line['sku']} belongs to order {keys.parent_key(line['key'])}")

    try:
        _ = joiner.plan("order", {"refund": "refunds"}, known_kinds=ORDER_KINDS)
    except UnknownKindError as exc:
        print("rejected:", exc)


if __name__ == "__main__":
    main()
