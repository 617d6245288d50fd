import time
import numpy as np
from local_smooth import LocalPolynomialSmoother, Dataset

def benchmark(n, n_jobs=4):
    print(f"Benchmark N={n}")
    x = np.sort(np.random.uniform(0, 1, n))
    y = np.sin(2 * np.pi * x) + np.random.normal(0, 0.1, n)
    data = Dataset(x, y)
    x_new = np.linspace(0, 1, 500)

    smoother = LocalPolynomialSmoother(degree=2, span=0.3)

    # Serial evaluation of the curve
    start = time.time()
    for _ in range(3):
        serial = smoother.fit_curve(data, x_new).to_numpy()
    end = time.time()
    serial_time = (end - start) / 3.0
    print(f"Serial curve time (avg of 3): {serial_time:.6f} s")

    # Same curve spread over a thread pool
    start = time.time()
    for _ in range(3):
        threaded = smoother.fit_curve(data, x_new, n_jobs=n_jobs).to_numpy()
    end = time.time()
    threaded_time = (end - start) / 3.0
    print(f"Threaded curve time, {n_jobs} workers (avg of 3): {threaded_time:.6f} s")

    assert np.array_equal(serial, threaded)
    print(f"Speedup: {serial_time / threaded_time:.2f}x")

if __name__ == "__main__":
    for n in [500, 1000, 5000]:
        benchmark(n)
