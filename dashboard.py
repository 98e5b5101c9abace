import sys
from pathlib import Path

import matplotlib.pyplot as plt
import requests

from crucible.entities.grid import CostGrid
from crucible.utils.consts import API_URL, REFERENCE_GRID

# Policy name -> line colour
ROUTES = {"crucible": "white", "ultra_crucible": "magenta"}


class CrucibleDashboard:

    def __init__(self, text: str):
        self.rows = text.strip("\r\n").splitlines()
        self.costs = CostGrid.from_rows(self.rows).costs
        self.results = {}

    def fetch(self):
        """Ask the server for the route under each preset policy."""
        for name in ROUTES:
            try:
                res = requests.post(API_URL, json={"grid": self.rows, "policy": name}, timeout=30)
            except requests.RequestException as e:
                print(f"❌ Connection Failed: {e}")
                continue
            if res.status_code == 200:
                self.results[name] = res.json()
                print(f"✅ {name}: cost {self.results[name]['cost']}")
            else:
                print(f"❌ {name}: server error {res.status_code}: {res.text}")

    def draw(self):
        fig, ax = plt.subplots(figsize=(9, 9))
        ax.imshow(self.costs, cmap="YlOrRd", interpolation="nearest")

        for name, colour in ROUTES.items():
            if name not in self.results:
                continue
            path = self.results[name]["path"]
            xs = [p["x"] for p in path]
            ys = [p["y"] for p in path]
            ax.plot(xs, ys, color=colour, linewidth=2, marker="o", markersize=3,
                    label=f"{name} ({self.results[name]['cost']})")

        h, w = self.costs.shape
        if w <= 30 and h <= 30:
            for y in range(h):
                for x in range(w):
                    ax.text(x, y, str(self.costs[y, x]), ha="center", va="center", fontsize=7)

        summary = ", ".join(f"{n}={r['cost']}" for n, r in self.results.items()) or "no result"
        ax.set_title(f"{w}x{h} grid: {summary}")
        if self.results:
            ax.legend(loc="upper right")
        plt.show()


if __name__ == "__main__":
    text = Path(sys.argv[1]).read_text() if len(sys.argv) > 1 else REFERENCE_GRID
    dashboard = CrucibleDashboard(text)
    dashboard.fetch()
    dashboard.draw()
