from .pde import GeneratorPrefactors, bs_generator, bs_generator_prefactors, generator_prefactors

__all__ = [
    "GeneratorPrefactors",
    "bs_generator",
    "bs_generator_prefactors",
    "generator_prefactors",
]
