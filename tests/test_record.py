from types import SimpleNamespace

import pytest

from row_nest import EntityMeta, InMemoryRegistry, Record, finalize, nest, reconstruct


def test_hydrate_classmethod_with_kind(schema: SimpleNamespace) -> None:
    rows = [
        {"id": 1, "name": "John", "post_id": 10, "post_title": "First Post"},
        {"id": 1, "name": "John", "post_id": 11, "post_title": "Second Post"},
    ]

    users = schema.User.hydrate(rows, [schema.Post])

    assert len(users) == 1
    assert len(users[0].posts) == 2


def test_hydrate_classmethod_with_meta_instance(schema: SimpleNamespace) -> None:
    rows = [{"id": 1, "name": "John", "post_id": 10, "post_title": "First Post"}]

    users = schema.User.hydrate(rows, [EntityMeta(schema.Post, schema.registry)])

    assert users[0].posts[0].title == "First Post"


def test_hydrate_classmethod_with_deeply_nested_meta(schema: SimpleNamespace) -> None:
    rows = [
        {
            "id": 1,
            "name": "John",
            "post_id": 10,
            "post_title": "First Post",
            "post_comment_id": 100,
            "post_comment_body": "Comment body",
        }
    ]

    users = schema.User.hydrate(rows, [schema.Post.nest(schema.Comment)])

    assert users[0].posts[0].comments[0].body == "Comment body"


def test_hydrate_without_relations(schema: SimpleNamespace) -> None:
    assert schema.Tag.hydrate([{"id": 1, "name": "python"}]) == [schema.Tag(id=1, name="python")]


def test_unregistered_record_cannot_hydrate() -> None:
    class Loose(Record):
        pass

    with pytest.raises(RuntimeError, match="Loose is not registered"):
        _ = Loose.hydrate([{"id": 1}])


def test_reconstruct_builds_and_transforms_in_one_call(schema: SimpleNamespace) -> None:
    rows = [
        {"id": 1, "title": "P1", "user_id": 5, "user_name": "John", "comment_id": 7, "comment_body": "hi"},
        {"id": 1, "title": "P1", "user_id": 5, "user_name": "John", "comment_id": 8, "comment_body": "yo"},
        {"id": 2, "title": "P2", "user_id": 6, "user_name": "Jane", "comment_id": None, "comment_body": None},
    ]

    posts = reconstruct(rows, schema.Post, [schema.User, schema.Comment], registry=schema.registry)

    assert [post.to_dict() for post in posts] == [
        {
            "id": 1,
            "title": "P1",
            "user": {"id": 5, "name": "John"},
            "comments": [{"id": 7, "body": "hi"}, {"id": 8, "body": "yo"}],
        },
        {"id": 2, "title": "P2", "user": {"id": 6, "name": "Jane"}, "comments": []},
    ]


def test_nest_function_accepts_kinds_and_meta(schema: SimpleNamespace) -> None:
    comment = EntityMeta(schema.Comment, schema.registry)
    post = nest(schema.Post, comment, registry=schema.registry)
    user = finalize(nest(schema.User, post, schema.Profile, registry=schema.registry))

    assert list(user.children) == ["posts", "profile"]
    assert user.children["posts"] is post
    assert comment.id_column == "post_comment_id"
    assert user.children["profile"].id_column == "profile_id"


def test_nest_function_reuses_existing_parent_meta(schema: SimpleNamespace) -> None:
    user = EntityMeta(schema.User, schema.registry)
    assert nest(user, schema.Post, registry=schema.registry) is user


def test_nest_function_passes_prefix_and_strict(schema: SimpleNamespace) -> None:
    author = nest(schema.User, registry=schema.registry, prefix="author_", strict=True)
    assert author.prefix == "author_"
    assert author.strict


def test_nest_function_rejects_options_for_existing_meta(schema: SimpleNamespace) -> None:
    user = EntityMeta(schema.User, schema.registry)

    with pytest.raises(ValueError, match="prefix and strict apply only"):
        _ = nest(user, schema.Post, registry=schema.registry, prefix="author_")
    with pytest.raises(ValueError, match="prefix and strict apply only"):
        _ = nest(user, schema.Post, registry=schema.registry, strict=True)
    assert user.children == {}


def test_members_and_relations_shadow_columns_of_the_same_name(schema: SimpleNamespace) -> None:
    user = schema.User(id=1, nest="column", posts="column")
    user.set_relation("posts", [])

    assert callable(user.nest)
    assert user.posts == []
    assert user.get_attributes() == {"id": 1, "nest": "column", "posts": "column"}
    assert user.get_relations() == {"posts": []}


def test_record_attribute_and_relation_access(schema: SimpleNamespace) -> None:
    user = schema.User(id=1, name="John")
    user.set_relation("posts", [])

    assert user.name == "John"
    assert user.posts == []
    assert user.get_relations() == {"posts": []}
    assert not user.relation_loaded("profile")
    with pytest.raises(AttributeError, match="has no attribute or relation 'profile'"):
        _ = user.profile


def test_record_equality_and_repr(schema: SimpleNamespace) -> None:
    first = schema.User(id=1, name="John")
    second = schema.User(id=1, name="John")

    assert first == second
    assert first != schema.Profile(id=1, name="John")
    second.set_relation("posts", [])
    assert first != second
    assert repr(first) == "User(id=1, name='John')"
    with pytest.raises(TypeError, match="unhashable"):
        _ = hash(first)


def test_record_subclass_declarations_reach_registry() -> None:
    registry = InMemoryRegistry()

    class Account(Record, registry=registry):
        __primary_key__ = "uuid"
        __relations__ = ("owners",)

    descriptor = registry.describe(Account)
    assert descriptor.primary_key == "uuid"
    assert descriptor.relations == frozenset({"owners"})
    assert Account.__registry__ is registry
