from pathlib import Path

import pytest

from wasmpack.mode import InstallMode
from wasmpack.targets import BuildOptions, BuildProfile, Target, build_steps


@pytest.mark.parametrize(
    "text, target",
    [
        ("bundler", Target.BUNDLER),
        ("browser", Target.BUNDLER),
        ("web", Target.WEB),
        ("nodejs", Target.NODEJS),
        ("no-modules", Target.NO_MODULES),
        ("deno", Target.DENO),
    ],
)
def test_parse_target(text, target):
    assert Target.parse(text) is target


def test_parse_unknown_target():
    with pytest.raises(ValueError, match="Unknown target: electron"):
        Target.parse("electron")


def test_target_display_round_trip():
    for target in Target:
        assert Target.parse(str(target)) is target
    assert str(Target.NO_MODULES) == "no-modules"


def test_default_target_is_bundler():
    assert BuildOptions().target is Target.BUNDLER


@pytest.mark.parametrize(
    "flag, profile",
    [
        ("dev", BuildProfile.DEV),
        ("debug", BuildProfile.DEV),
        ("profiling", BuildProfile.PROFILING),
        ("release", BuildProfile.RELEASE),
    ],
)
def test_build_different_profiles(flag, profile):
    assert BuildOptions(**{flag: True}).profile() is profile


def test_default_profile_is_release():
    assert BuildOptions().profile() is BuildProfile.RELEASE


@pytest.mark.parametrize(
    "flags",
    [
        {"dev": True, "release": True},
        {"debug": True, "profiling": True},
        {"release": True, "profiling": True},
    ],
)
def test_conflicting_profiles(flags):
    with pytest.raises(ValueError, match="Can only supply one of"):
        BuildOptions(**flags).profile()


def test_build_with_arbitrary_cargo_options():
    opts = BuildOptions(path=Path("--no-default-features"), extra_options=["--x"])
    normalized = opts.normalized()
    assert normalized.path is None
    assert normalized.extra_options == ["--no-default-features", "--x"]
    assert opts.extra_options == ["--x"]


def test_normalized_keeps_real_path():
    opts = BuildOptions(path=Path("crate"))
    assert opts.normalized().path == Path("crate")


def test_build_steps_force_skips_checks():
    normal = build_steps(InstallMode.NORMAL)
    force = build_steps(InstallMode.FORCE)
    assert normal[0] == "step_check_rustc_version"
    assert "step_check_rustc_version" not in force
    assert normal[-len(force):] == force
    assert force[0] == "step_build_wasm"
    assert force[-1] == "step_create_json"


def test_build_steps_no_install_keeps_checks():
    assert build_steps(InstallMode.NOINSTALL) == build_steps(InstallMode.NORMAL)