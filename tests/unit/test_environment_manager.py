# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Unit tests for the environment manager.
"""
import os
import pytest
from ssdotenv.MANAGERS.environment_manager import EnvironmentManager
from ssdotenv.MODELS.entry import Entry
from ssdotenv.MODELS.errors import SimpleEnvError
from ssdotenv.MODELS.load_options import LoadOptions


def entries(*pairs):
    return [Entry(key=k, value=v) for k, v in pairs]


class TestEnvironmentManager:
    """Tests for EnvironmentManager."""

    def test_defaults_to_process_environment(self):
        """Without an explicit mapping the real environment is used."""
        assert EnvironmentManager().environ is os.environ

    def test_set_if_absent(self):
        """Existing variables are kept, missing ones are set."""
        environ = {"A": "existing"}
        manager = EnvironmentManager(environ)
        applied = manager.set_if_absent(entries(("A", "new"), ("B", "1")))
        assert environ == {"A": "existing", "B": "1"}
        assert applied == entries(("B", "1"))

    def test_set_if_absent_first_duplicate_wins(self):
        """With set-if-absent the first of two duplicates sticks."""
        environ = {}
        EnvironmentManager(environ).set_if_absent(entries(("A", "1"), ("A", "2")))
        assert environ == {"A": "1"}

    def test_override(self):
        """Override replaces values and later duplicates win."""
        environ = {"A": "existing"}
        manager = EnvironmentManager(environ)
        applied = manager.override(entries(("A", "1"), ("A", "2")))
        assert environ == {"A": "2"}
        assert len(applied) == 2

    def test_apply_dispatches_on_policy(self):
        environ = {"A": "existing"}
        manager = EnvironmentManager(environ)
        manager.apply(entries(("A", "1")), override=False)
        assert environ["A"] == "existing"
        manager.apply(entries(("A", "1")), override=True)
        assert environ["A"] == "1"

    def test_get_or(self):
        """Defined variables are returned, otherwise the default."""
        manager = EnvironmentManager({"A": "1", "EMPTY": ""})
        assert manager.get_or("A", "default") == "1"
        assert manager.get_or("EMPTY", "default") == ""
        assert manager.get_or("MISSING", "default") == "default"

    def test_load_file(self, tmp_path):
        """Files are resolved against base_dir and applied."""
        (tmp_path / ".env").write_text("A=1\nB='two'\n")
        environ = {"A": "existing"}
        manager = EnvironmentManager(environ, base_dir=str(tmp_path))
        manager.load_file(".env", override=False)
        assert environ == {"A": "existing", "B": "two"}

    def test_load_with_options(self, tmp_path):
        env_file = tmp_path / "other.env"
        env_file.write_text("A=1\n")
        environ = {"A": "existing"}
        EnvironmentManager(environ).load(LoadOptions(path=str(env_file)))
        assert environ == {"A": "1"}

    def test_load_missing_file(self, tmp_path):
        """Read failures surface as a single io error kind."""
        manager = EnvironmentManager({}, base_dir=str(tmp_path))
        with pytest.raises(SimpleEnvError) as excinfo:
            manager.load_file("missing.env")
        assert excinfo.value.kind == "io"
        assert isinstance(excinfo.value.__cause__, FileNotFoundError)

    def test_load_strict_applies_partial_result(self, tmp_path):
        """Strict mode applies what parsed, then raises."""
        (tmp_path / ".env").write_text("A=1\nbroken\nB=2\n")
        environ = {}
        manager = EnvironmentManager(environ, base_dir=str(tmp_path))
        with pytest.raises(SimpleEnvError) as excinfo:
            manager.load_file(".env", strict=True)
        assert excinfo.value.kind == "lines"
        assert excinfo.value.message == "Error in line 2: No '=' separator in 'broken'"
        assert [e.as_tuple() for e in excinfo.value.entries] == [("A", "1"), ("B", "2")]
        assert environ == {"A": "1", "B": "2"}

    def test_load_lenient_ignores_skipped_lines(self, tmp_path):
        (tmp_path / ".env").write_text("A=1\nbroken\n")
        environ = {}
        EnvironmentManager(environ, base_dir=str(tmp_path)).load_file(".env")
        assert environ == {"A": "1"}

    def test_get_merged_environment(self, tmp_path):
        """Files layer in order, explicit values win, the source is untouched."""
        (tmp_path / "base.env").write_text("A=base\nB=base\n")
        (tmp_path / "local.env").write_text("B=local\nC=local\n")
        environ = {"A": "process", "PATH": "/bin"}
        manager = EnvironmentManager(environ, base_dir=str(tmp_path))

        merged = manager.get_merged_environment({"C": "explicit"}, ["base.env", "local.env"])

        assert merged == {"A": "base", "B": "local", "C": "explicit", "PATH": "/bin"}
        assert environ == {"A": "process", "PATH": "/bin"}

    def test_get_merged_environment_without_override(self, tmp_path):
        (tmp_path / ".env").write_text("A=file\nB=file\n")
        manager = EnvironmentManager({"A": "process"}, base_dir=str(tmp_path))
        merged = manager.get_merged_environment({}, [".env"], override=False)
        assert merged == {"A": "process", "B": "file"}

    def test_load_invalid_utf8(self, tmp_path):
        """Undecodable files surface as the same io error kind."""
        (tmp_path / ".env").write_bytes(b"A=1\nB=\xff\xfe\n")
        environ = {}
        manager = EnvironmentManager(environ, base_dir=str(tmp_path))
        with pytest.raises(SimpleEnvError) as excinfo:
            manager.load_file(".env")
        assert excinfo.value.kind == "io"
        assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)
        assert environ == {}
