import pytest

from typing import List, Tuple

from install_md.options import Options, apply_extra_flags, tool_flag


class TestOptions:
    def test_defaults(self) -> None:
        options = Options()
        assert options.extra_flags == {}
        assert options.languages is None
        assert options.docker == "docker"

    def test_flag(self) -> None:
        options = Options()
        assert options.flag("apt-get", "-y") is options
        assert options.extra_flags == {"apt-get": " -y"}

    def test_flags_accumulate(self) -> None:
        options = (
            Options().flag("apt-get", "-y").flag("apt-get", "--no-install-recommends")
        )
        assert options.extra_flags == {"apt-get": " -y --no-install-recommends"}

    def test_independent_tools(self) -> None:
        options = Options().flag("apt-get", "-y").flag("pip", "-q")
        assert options.extra_flags == {"apt-get": " -y", "pip": " -q"}

    def test_instances_independent(self) -> None:
        Options().flag("apt-get", "-y")
        assert Options().extra_flags == {}

    def test_from_flags(self) -> None:
        options = Options.from_flags([("apt-get", "-y"), ("apt-get", "-q")])
        assert options.extra_flags == {"apt-get": " -y -q"}
        assert Options.from_flags({"apt-get": "-y"}).extra_flags == {"apt-get": " -y"}
        assert Options.from_flags([]).extra_flags == {}


class TestApplyExtraFlags:
    def test_flag_spliced_after_prefix(self) -> None:
        assert apply_extra_flags({"apt-get": " -y"}, ["apt-get install foo"]) == [
            "apt-get -y install foo"
        ]

    def test_accumulated_flags_inserted_once(self) -> None:
        options = (
            Options().flag("apt-get", "-y").flag("apt-get", "--no-install-recommends")
        )
        assert apply_extra_flags(options.extra_flags, ["apt-get install foo"]) == [
            "apt-get -y --no-install-recommends install foo"
        ]

    def test_non_matching_unchanged(self) -> None:
        commands = ["make", "sudo apt-get install foo", "", "apt-get"]
        assert apply_extra_flags({"apt-get": " -y"}, commands) == [
            "make",
            "sudo apt-get install foo",
            "",
            "apt-get -y",
        ]

    def test_order_and_length_preserved(self) -> None:
        commands = ["a", "apt-get update", "b", "apt-get install x"]
        assert apply_extra_flags({"apt-get": " -y"}, commands) == [
            "a",
            "apt-get -y update",
            "b",
            "apt-get -y install x",
        ]

    def test_input_not_modified(self) -> None:
        commands = ["apt-get update"]
        apply_extra_flags({"apt-get": " -y"}, commands)
        assert commands == ["apt-get update"]

    def test_no_flags(self) -> None:
        assert apply_extra_flags({}, ["apt-get update"]) == ["apt-get update"]

    @pytest.mark.parametrize(
        "flags, exp",
        [
            # The shorter prefix is applied first and so the longer one no
            # longer matches
            ([("pip", " -q"), ("pip install", " --user")], "pip -q install foo"),
            # Both match when the longer prefix comes first
            (
                [("pip install", " --user"), ("pip", " -q")],
                "pip -q install --user foo",
            ),
        ],
    )
    def test_multiple_matches_applied_in_order(
        self, flags: List[Tuple[str, str]], exp: str
    ) -> None:
        assert apply_extra_flags(dict(flags), ["pip install foo"]) == [exp]


class TestToolFlag:
    @pytest.mark.parametrize(
        "value, exp",
        [
            ("apt-get=-y", ("apt-get", "-y")),
            ("pip=--index-url=http://x", ("pip", "--index-url=http://x")),
            ("sudo apt-get=-q", ("sudo apt-get", "-q")),
        ],
    )
    def test_valid(self, value: str, exp: Tuple[str, str]) -> None:
        assert tool_flag(value) == exp

    @pytest.mark.parametrize("value", ["", "apt-get", "apt-get=", "=-y"])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(ValueError):
            tool_flag(value)
