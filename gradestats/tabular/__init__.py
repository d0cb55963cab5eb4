"""Text-level handling of delimited grade statistics exports.

Submodules are imported explicitly (``gradestats.tabular.preprocess`` etc.);
this package keeps no eager imports so the row model can depend on
``gradestats.tabular.fields`` without import cycles.
"""
