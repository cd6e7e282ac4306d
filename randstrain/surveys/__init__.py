"""
Random strain surveys.

- DistributionParameters: survey configuration
- survey / run_survey: draw configurations and assemble their strain fields
- strains_to_dataframe: flatten survey output for statistics
"""

from .parameters import DistributionParameters, DEFAULT_SURVEY_PREFIX
from .strain_survey import (
    DEFAULT_SEED,
    STRAIN_COLUMNS,
    spawn_generators,
    survey,
    strains_to_dataframe,
    run_survey,
)

__all__ = [
    'DistributionParameters',
    'DEFAULT_SURVEY_PREFIX',
    'DEFAULT_SEED',
    'STRAIN_COLUMNS',
    'spawn_generators',
    'survey',
    'strains_to_dataframe',
    'run_survey',
]
