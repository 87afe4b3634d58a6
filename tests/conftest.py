from collections.abc import Callable
from textwrap import dedent

import pytest

from tplpatch.markers import MarkerCodec, MarkerType
from tplpatch.storage import MemoryStorage
from tplpatch.updater import TemplateUpdater

NAMESPACE = 'mod_news'

TEMPLATE = dedent("""\
    <!--#set var="header" value="<h1>Title</h1>"-->
    <!--#set var="body;main" filter="html" value="Hello, world"-->
    <!--#set GSvar="footer" value="(c) 2024"-->
    """)


@pytest.fixture
def codec() -> MarkerCodec:
    return MarkerCodec(NAMESPACE)


@pytest.fixture
def add_wrap(codec: MarkerCodec) -> Callable[[str], str]:
    """Wrap text the way an `add` insertion is written."""
    return lambda text: codec.wrap(text, MarkerType.ADD)


@pytest.fixture
def delete_wrap(codec: MarkerCodec) -> Callable[[str], str]:
    """Wrap text the way a disabled original is written."""
    return lambda text: codec.wrap(text, MarkerType.DELETE)


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage({'page.tpl': TEMPLATE})


@pytest.fixture
def updater(storage: MemoryStorage) -> TemplateUpdater:
    """Updater with `page.tpl` loaded."""
    result = TemplateUpdater(storage, NAMESPACE)
    result.load('page.tpl')
    return result


@pytest.fixture
def raw_updater() -> Callable[[str], TemplateUpdater]:
    """Factory for an updater holding the given text."""

    def _create(contents: str, namespace: str = NAMESPACE) -> TemplateUpdater:
        result = TemplateUpdater(MemoryStorage(), namespace)
        result.set_raw_contents(contents)
        return result

    return _create


@pytest.fixture
def namespace() -> str:
    return NAMESPACE


@pytest.fixture
def template_text() -> str:
    """Contents of `page.tpl` in the `storage` fixture."""
    return TEMPLATE
