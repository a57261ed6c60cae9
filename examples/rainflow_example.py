from cyclecount import init_tracing, rainflow, range_histogram, total_weight


def main() -> None:
    init_tracing()

    # Illustrative history from ASTM E1049-85
    history = [-2.0, 1.0, -3.0, 5.0, -1.0, 3.0, -4.0, 4.0, -2.0]

    cycles = rainflow(history)
    print("Rainflow cycles (weight, range, mean):")
    for weight, rng, mean in cycles:
        print(f"  {weight:.1f}  {rng:6.2f}  {mean:6.2f}")
    print(f"Total: {total_weight(cycles):.1f} cycles")

    hist = range_histogram(cycles, bin_size=1.0)
    print("\nRange histogram:")
    for lo, hi, count in zip(hist.lower, hist.upper, hist.weights):
        if count:
            print(f"  [{lo:.0f}, {hi:.0f}): {count:.1f}")


if __name__ == "__main__":
    main()
