"""
This module defines the Particle class, a simple data container for one body of a
central-mass system.

The class stores mass, position x/y/z and velocity vx/vy/vz as floating-point
attributes and provides a clean string representation for debugging. It is the input
format for building a SimulationState; the first particle handed to a simulation is
the central mass. The class makes no assumptions about units, leaving those to the
caller (the solver works in units where G = 1, so mass enters as the gravitational
parameter).
"""
class Particle:
	def __init__(
		self,
		mass: float = 0.0,
		x: float = 0.0,
		y: float = 0.0,
		z: float = 0.0,
		vx: float = 0.0,
		vy: float = 0.0,
		vz: float = 0.0,
	):
		self.mass = float(mass)
		self.x = float(x)
		self.y = float(y)
		self.z = float(z)
		self.vx = float(vx)
		self.vy = float(vy)
		self.vz = float(vz)

	@property
	def position(self) -> tuple:
		return (self.x, self.y, self.z)

	@property
	def velocity(self) -> tuple:
		return (self.vx, self.vy, self.vz)

	def __repr__(self) -> str:
		return (f"Particle(mass={self.mass}, x={self.x}, y={self.y}, z={self.z}, "
				f"vx={self.vx}, vy={self.vy}, vz={self.vz})")
