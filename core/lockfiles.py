"""
Recognises dependency lockfiles so they can be left out of the commit context.
They are machine generated and only inflate the diff.
"""

LOCKFILE_PATH_ENDINGS = (
    # JavaScript / Node.js
    "package-lock.json",
    "npm-shrinkwrap.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "pnpm-workspace.yaml",
    "bun.lockb",
    ".yarnrc.yml",
    ".pnp.js",
    ".pnp.cjs",
    "jspm.lock",
    # Python
    "Pipfile.lock",
    "poetry.lock",
    "pdm.lock",
    ".pdm-lock.toml",
    "conda-lock.yml",
    "pylock.toml",
    # Ruby
    "Gemfile.lock",
    ".bundle/config",
    # PHP
    "composer.lock",
    # Java / JVM
    "gradle.lockfile",
    "lockfile.json",
    "dependency-lock.json",
    "dependency-reduced-pom.xml",
    "coursier.lock",
    # Scala
    "build.sbt.lock",
    # .NET
    "packages.lock.json",
    "paket.lock",
    "project.assets.json",
    # Rust
    "Cargo.lock",
    # Go
    "go.sum",
    "Gopkg.lock",
    "glide.lock",
    "vendor/vendor.json",
    # Zig
    "build.zig.zon.lock",
    # OCaml
    "dune.lock",
    "opam.lock",
    # Kotlin
    "kotlin-js-store",
    # Swift / iOS
    "Package.resolved",
    "Podfile.lock",
    "Cartfile.resolved",
    # Dart / Flutter
    "pubspec.lock",
    # Elixir / Erlang
    "mix.lock",
    "rebar.lock",
    # Haskell
    "stack.yaml.lock",
    "cabal.project.freeze",
    # Elm
    "elm-stuff/exact-dependencies.json",
    # Crystal
    "shard.lock",
    # Julia
    "Manifest.toml",
    "JuliaManifest.toml",
    # R
    "renv.lock",
    "packrat.lock",
    # Nim
    "nimble.lock",
    # D
    "dub.selections.json",
    # Lua
    "rocks.lock",
    # Perl
    "carton.lock",
    "cpanfile.snapshot",
    # C / C++
    "conan.lock",
    "vcpkg-lock.json",
    # Infrastructure as Code
    ".terraform.lock.hcl",
    "Berksfile.lock",
    "Puppetfile.lock",
    # Nix
    "flake.lock",
    # Deno
    "deno.lock",
    # DevContainers
    "devcontainer.lock.json",
)


def normalize_path(path: str) -> str:
    return path.replace("\\", "/")


def is_lockfile(path: str) -> bool:
    """
    Checks whether ``path`` names a known lockfile.

    The path must equal a known ending or end with ``"/" + ending``, so
    ``frontend/package-lock.json`` matches while ``my-package-lock.json.bak``
    does not.
    """
    normalized = normalize_path(path)
    return any(
        normalized == ending or normalized.endswith("/" + ending)
        for ending in LOCKFILE_PATH_ENDINGS
    )
