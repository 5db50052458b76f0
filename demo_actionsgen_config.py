# demo_actionsgen_config.py
# Example configuration for a cross-built library published from tags and master.
#   actionsgen generate --config demo_actionsgen_config.py
from __future__ import annotations

from actionsgen import Branch, Equals, Run, Sbt, Settings, StartsWith, Tag


def settings():
    return Settings(
        scala_versions=["2.12.10", "2.13.1"],
        java_versions=["adopt@1.8", "adopt@1.11"],
        oses=["ubuntu-latest", "windows-latest"],
        build_matrix_additions={"ci": ["ciJVM", "ciJS"]},
        build_preamble=[Run(["npm install -g jsdom"], name="Install jsdom")],
        build=Sbt(["${{ matrix.ci }}"], name="Build project"),
        publish_target_branches=[
            Equals(Branch("master")),
            StartsWith(Tag("v")),
        ],
        publish=Sbt(["ci-release"], name="Publish project", env={
            "PGP_PASSPHRASE": "${{ secrets.PGP_PASSPHRASE }}",
            "SONATYPE_PASSWORD": "${{ secrets.SONATYPE_PASSWORD }}",
        }),
        target_dirs=["target", "core/jvm/target", "core/js/target"],
    )
