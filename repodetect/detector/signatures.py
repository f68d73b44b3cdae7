"""Build-tool signature table.

Order matters: detected build tools are reported in this order regardless
of the order in which a backend lists the root files. Each marker maps to
exactly one tool.
"""

from repodetect.detector.types import BuildToolSignature

MAVEN = "Maven"
GRADLE = "Gradle"
NODEJS = "NodeJS"
GOLANG = "Golang"
CARGO = "Cargo"
PIP = "Pip"
BUNDLER = "Bundler"
COMPOSER = "Composer"
DOTNET = "DotNet"
CMAKE = "CMake"
MAKE = "Make"

DEFAULT_SIGNATURES: tuple[BuildToolSignature, ...] = (
    # JVM
    BuildToolSignature(MAVEN, "pom.xml"),
    BuildToolSignature(GRADLE, "build.gradle"),
    # JavaScript / TypeScript
    BuildToolSignature(NODEJS, "package.json"),
    # Go / Rust
    BuildToolSignature(GOLANG, "go.mod"),
    BuildToolSignature(CARGO, "Cargo.toml"),
    # Python / Ruby / PHP
    BuildToolSignature(PIP, "requirements.txt"),
    BuildToolSignature(BUNDLER, "Gemfile"),
    BuildToolSignature(COMPOSER, "composer.json"),
    # .NET
    BuildToolSignature(DOTNET, "global.json"),
    # Native
    BuildToolSignature(CMAKE, "CMakeLists.txt"),
    BuildToolSignature(MAKE, "Makefile"),
)
