"""Compute shortest Bayesian confidence intervals for a list of counts."""

import logging
import time
from pathlib import Path

import hydra
from omegaconf import DictConfig, OmegaConf

from effci.reporting import efficiency_frame

logger = logging.getLogger(__name__)


@hydra.main(
    version_base="1.1", config_path="../conf", config_name="compute_efficiency"
)
def main(cfg: DictConfig):
    counts = OmegaConf.to_container(cfg.counts, resolve=True)
    logger.info(
        f"Computing {len(counts)} intervals at confidence level {cfg.conflevel}"
    )

    start_time = time.perf_counter()
    df = efficiency_frame(counts, cfg.conflevel, n_jobs=cfg.n_jobs)
    logger.info(f"Done in {time.perf_counter() - start_time:.2f} seconds.")

    not_converged = df[~df["converged"]]
    if len(not_converged) > 0:
        logger.warning(
            "Minimizer did not converge for %s of %s counts: %s",
            len(not_converged),
            len(df),
            list(zip(not_converged["k"], not_converged["n"], strict=True)),
        )

    for row in df.itertuples(index=False):
        logger.info(
            f"k={row.k:>6} n={row.n:>6}  eff={row.mode:.4f} "
            f"-{row.err_low:.4f} +{row.err_high:.4f}  [{row.low:.4f}, {row.high:.4f}]"
        )

    output_path = Path(cfg.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path, index=False)
    logger.info(f"Saved intervals to {output_path.resolve()}")


if __name__ == "__main__":
    main()
