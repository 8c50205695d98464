"""Demo script: generate a random trajectory and score its flexibility."""

from pathlib import Path

from flexcalc import compute_flexibility, write_random_trajectory

OUTPUT = Path(__file__).resolve().parent / "random.traj"


def main():
    with open(OUTPUT, "w") as handle:
        write_random_trajectory(handle, n_frames=1000, n_atoms=250, seed=1)
    print(f"Wrote {OUTPUT}")

    result = compute_flexibility(OUTPUT)
    print(f"Frames: {result.n_frames}, atoms per frame: {result.n_atoms}")
    print(f"Closest frame to mean: {result.closest_frame.label} "
          f"(RMSD {result.closest_rmsd:.4f})")
    print(f"Flexibility: {result.format_score()}")


if __name__ == "__main__":
    main()
