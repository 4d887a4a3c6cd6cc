from __future__ import annotations
from worldcal.core.engine import EngineRegistry
from worldcal.engines.specs import ALL_SPECS
from worldcal.engines.factory import make_engine
from worldcal.engines.variants import default_variant_id, expand_variants

def build_registry(*, active: str = "gregorian") -> EngineRegistry:
    engines = {}
    for name, spec in ALL_SPECS.items():
        engines[name] = make_engine(spec)
        for vid, vdefn in expand_variants(spec).items():
            engines[vid] = make_engine(vdefn)
    reg = EngineRegistry(engines)
    if active in ALL_SPECS:
        active = default_variant_id(ALL_SPECS[active]) or active
    reg.set_active(active)
    return reg
