from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from textwrap import dedent

import pytest

RUST_POST = dedent(
    """\
    ---
    layout: post
    category: rust
    ---

    # Guessing game in Rust

    ```rust
    use std::cmp::Ordering;

    match guess.cmp(&secret_number) {
        Ordering::Less => println!("Too small!"),
        Ordering::Greater => println!("Too big!"),
        Ordering::Equal => println!("You win!"),
    }
    ```
    """
)

REACT_POST = dedent(
    """\
    ---
    layout: post
    category: react
    custom_js: react-demo
    ---

    Hooks in a nutshell.

    ```jsx
    const [count, setCount] = useState(0);
    ```
    """
)

BCRYPT_POST = dedent(
    """\
    ---
    layout: post
    category: python
    title: "Hashing passwords: bcrypt"
    ---

    ```python
    import bcrypt
    hashed = bcrypt.hashpw(b"secret", bcrypt.gensalt())
    ```

    ~~~yaml
    Resources:
      Queue:
        Type: AWS::SQS::Queue
    ~~~
    """
)


@pytest.fixture
def posts_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "_posts"
    directory.mkdir()
    return directory


@pytest.fixture
def write_post(posts_dir: Path) -> Callable[[str, str], Path]:
    def _write(name: str, content: str) -> Path:
        path = posts_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_posts(write_post: Callable[[str, str], Path], posts_dir: Path) -> Path:
    write_post("2023-01-10-rust-guessing-game.md", RUST_POST)
    write_post("2023-03-02-react-hooks.md", REACT_POST)
    write_post("2022-11-20-bcrypt-passwords.md", BCRYPT_POST)
    return posts_dir
