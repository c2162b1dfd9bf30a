import sqlite3

from row_nest import InMemoryRegistry, Record, configure_logging, reconstruct, rows_from_tuples


models = InMemoryRegistry()


class User(Record, registry=models):
    __relations__ = ("posts",)


class Post(Record, registry=models):
    __relations__ = ("comments",)


class Comment(Record, registry=models):
    pass


def main() -> None:
    configure_logging(level="DEBUG")

    connection = sqlite3.connect(":memory:")
    try:
        _ = connection.executescript(
            """
            CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT);
            CREATE TABLE posts (id INTEGER PRIMARY KEY, user_id INTEGER, title TEXT);
            CREATE TABLE comments (id INTEGER PRIMARY KEY, post_id INTEGER, body TEXT);
            INSERT INTO users VALUES (1, 'Alice'), (2, 'Bob');
            INSERT INTO posts VALUES (10, 1, 'Hello'), (11, 1, 'Again');
            INSERT INTO comments VALUES (100, 10, 'Nice post');
            """
        )
        cursor = connection.execute(
            """
            SELECT users.id, users.name,
                   posts.id AS post_id, posts.title AS post_title,
                   comments.id AS post_comment_id, comments.body AS post_comment_body
            FROM users
            LEFT JOIN posts ON posts.user_id = users.id
            LEFT JOIN comments ON comments.post_id = posts.id
            ORDER BY users.id, posts.id
            """
        )
        rows = rows_from_tuples(cursor.description, cursor.fetchall())
    finally:
        connection.close()

    for user in reconstruct(rows, User, [Post.nest(Comment)], registry=models):
        print(user.to_dict())


if __name__ == "__main__":
    main()
