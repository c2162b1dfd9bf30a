from types import SimpleNamespace

import pytest

from row_nest import InMemoryRegistry, Record


models = InMemoryRegistry()


class User(Record, registry=models):
    __relations__ = ("posts", "profile")


class Post(Record, registry=models):
    __relations__ = ("user", "comments", "tags")


class Comment(Record, registry=models):
    __relations__ = ("post",)


class Profile(Record, registry=models):
    __relations__ = ("user",)


class Tag(Record, registry=models):
    __relations__ = ("posts",)


@pytest.fixture(scope="session")
def schema() -> SimpleNamespace:
    return SimpleNamespace(registry=models, User=User, Post=Post, Comment=Comment, Profile=Profile, Tag=Tag)
