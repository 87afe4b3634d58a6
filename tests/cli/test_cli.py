import sys
import textwrap
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from pytest_mock import MockerFixture

from tplpatch.cli.main import app
from tplpatch.cli.utils import setup_logging
from tplpatch.markers import MarkerCodec
from tplpatch.version import __version__

if TYPE_CHECKING:
    from _pytest.capture import CaptureFixture
    from _pytest.monkeypatch import MonkeyPatch

TEMPLATE = textwrap.dedent("""\
    <!--#set var="header" value="<h1>News</h1>"-->
    <!--#set var="item" value="<li>##title##</li>"-->
    """)

MANIFEST = textwrap.dedent("""\
    namespace: mod_news
    root: site
    templates:
      - template: news.tpl
        backup: news.tpl.bak
        patches:
          - method: to-beginning
            names: [header]
            content: '<div class="banner"></div>'
          - method: replace
            names: [item]
            pattern: '<li>'
            content: '<li class="news">'
    """)


@pytest.fixture
def project(tmp_path: Path, monkeypatch: 'MonkeyPatch') -> Path:
    """Manifest plus one template, with the working directory set to it."""
    (tmp_path / 'site').mkdir()
    (tmp_path / 'site' / 'news.tpl').write_text(TEMPLATE, encoding='utf-8')
    (tmp_path / 'tplpatch.yaml').write_text(MANIFEST, encoding='utf-8')
    monkeypatch.chdir(tmp_path)
    return tmp_path


def run_cli(mocker: MockerFixture, *args: str) -> int:
    mocker.patch('sys.argv', ['tplpatch', *args])
    with pytest.raises(SystemExit) as exc:
        app()
    return exc.value.code


def test_main_version_prints_and_exits(
    monkeypatch: 'MonkeyPatch',
    capsys: 'CaptureFixture[str]',
) -> None:
    monkeypatch.setattr(sys, 'argv', ['tplpatch', '--version'])
    with pytest.raises(SystemExit) as exc:
        app()
    assert exc.value.code == 0
    captured = capsys.readouterr()
    assert __version__ in captured.out


def test_apply_then_rollback(project: Path, mocker: MockerFixture) -> None:
    template = project / 'site' / 'news.tpl'

    assert run_cli(mocker, 'apply') == 0

    patched = template.read_text(encoding='utf-8')
    codec = MarkerCodec('mod_news')
    assert codec.wrap('<div class="banner"></div>', 'add') + '<h1>News</h1>' in patched
    assert codec.wrap('<li>', 'delete') + codec.wrap('<li class="news">', 'add') in patched
    assert (project / 'site' / 'news.tpl.bak').read_text(encoding='utf-8') == TEMPLATE

    # second run finds everything in place
    assert run_cli(mocker, 'apply') == 0
    assert template.read_text(encoding='utf-8') == patched

    assert run_cli(mocker, 'rollback') == 0
    assert template.read_text(encoding='utf-8') == TEMPLATE
    assert (project / 'site' / 'news.tpl.bak').read_text(encoding='utf-8') == TEMPLATE


def test_apply_check_reports_without_saving(project: Path, mocker: MockerFixture) -> None:
    template = project / 'site' / 'news.tpl'

    assert run_cli(mocker, 'apply', '--check') == 2
    assert template.read_text(encoding='utf-8') == TEMPLATE

    assert run_cli(mocker, 'apply') == 0
    assert run_cli(mocker, 'apply', '--check') == 0


def test_rollback_check(project: Path, mocker: MockerFixture) -> None:
    assert run_cli(mocker, 'rollback', '--check') == 0

    run_cli(mocker, 'apply')
    patched = (project / 'site' / 'news.tpl').read_text(encoding='utf-8')

    assert run_cli(mocker, 'rollback', '--check') == 2
    assert (project / 'site' / 'news.tpl').read_text(encoding='utf-8') == patched


def test_rollback_refuses_unbalanced_markers(project: Path, mocker: MockerFixture) -> None:
    template = project / 'site' / 'news.tpl'
    opening = MarkerCodec('mod_news').get_marker('opening', 'add')
    template.write_text(TEMPLATE + opening, encoding='utf-8')

    assert run_cli(mocker, 'rollback') == 1
    assert template.read_text(encoding='utf-8') == TEMPLATE + opening

    assert run_cli(mocker, 'rollback', '--lenient') == 0


def test_missing_template_fails(project: Path, mocker: MockerFixture) -> None:
    (project / 'site' / 'news.tpl').unlink()

    assert run_cli(mocker, 'apply') == 1


def test_invalid_manifest_fails(project: Path, mocker: MockerFixture) -> None:
    (project / 'tplpatch.yaml').write_text(
        textwrap.dedent("""\
            namespace: mod_news
            templates:
              - template: news.tpl
                patches:
                  - type: delete
                    method: to_end
            """),
        encoding='utf-8',
    )

    assert run_cli(mocker, 'apply') == 1


def test_sets_lists_template_sets(
    project: Path,
    mocker: MockerFixture,
    capsys: 'CaptureFixture[str]',
) -> None:
    assert run_cli(mocker, 'sets', 'news.tpl', '--root', 'site') == 0

    out = capsys.readouterr().out
    assert 'header' in out
    assert 'item' in out


def test_sets_unknown_name(project: Path, mocker: MockerFixture) -> None:
    assert run_cli(mocker, 'sets', 'news.tpl', '--root', 'site', '--name', 'missing') == 1
    assert run_cli(mocker, 'sets', 'news.tpl', '--root', 'site', '--name', 'item') == 0


def test_setup_logging_uses_verbose_count(mocker: MockerFixture) -> None:
    resolve = mocker.patch('tplpatch.cli.utils.resolve_verbosity', return_value=2)
    configure = mocker.patch('tplpatch.cli.utils.configure_logging')

    setup_logging(2)

    resolve.assert_called_once_with(verbose=2)
    configure.assert_called_once_with(verbosity=2)
