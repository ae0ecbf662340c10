"""
Island Terrain Demo

This script demonstrates using relief to build a coloured island terrain
with quantized colour bands.

Usage:
    python island.py

The script will:
1. Configure a 6 x 6 tile terrain with 16 subdivisions per tile
2. Build the gradient preview and terrain mesh
3. Export the mesh to PLY and the gradient preview to PNG
4. Run a second tick to show that unchanged terrains are not rebuilt
5. Switch to wireframe and rebuild
"""

import logging
from pathlib import Path

from relief import GradientConfig, NoiseConfig, Terrain, TerrainConfig, TerrainPipeline
from relief.io import FileExporter, save_gradient_image

OUTPUT_DIR = Path(__file__).parent / "output"


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    config = TerrainConfig(
        size=(6, 6),
        resolution=16,
        height_exponent=2.0,
        sea_percent=35.0,
        export=True,
        noise=NoiseConfig(
            seed=42,
            frequency=1.5,
            octaves=5,
            gradient=GradientConfig(size=(512, 32), segments=8, smoothness=0.3),
        ),
    )
    terrain = Terrain(config, name="island")
    pipeline = TerrainPipeline(exporter=FileExporter(OUTPUT_DIR / "island.ply"))

    print("Building island terrain...")
    print(f"  Grid size: {config.grid_size}")
    print(f"  Sea level: {config.sea_percent}%")

    pipeline.update([terrain])

    mesh = pipeline.mesh_pool.get(terrain.mesh)
    low, high = mesh.bounds
    print("\nMesh generated successfully:")
    print(f"  Number of vertices: {mesh.vertex_count}")
    print(f"  Number of triangles: {mesh.primitive_count}")
    print(f"  X range: [{low[0]:.2f}, {high[0]:.2f}]")
    print(f"  Y range: [{low[1]:.2f}, {high[1]:.2f}]")
    print(f"  Z range: [{low[2]:.2f}, {high[2]:.2f}]")

    texture = pipeline.image_pool.get(terrain.image)
    save_gradient_image(texture, OUTPUT_DIR / "island_gradient.png")
    print(f"\nGradient preview saved to: {OUTPUT_DIR / 'island_gradient.png'}")

    rebuilt = pipeline.update([terrain])
    print(f"\nSecond tick rebuilt {len(rebuilt)} terrain(s)")

    config.wireframe = True
    pipeline.update([terrain])
    wireframe = pipeline.mesh_pool.get(terrain.mesh)
    print(f"Wireframe: {wireframe.primitive_count} line segments")

    return terrain


if __name__ == "__main__":
    main()
