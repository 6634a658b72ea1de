from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, ValidationError

from solvers.editor import Mode
from solvers.simulation import StringSimulation

app = FastAPI(title="Vibrating String Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:8080",
        "http://127.0.0.1:8080",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Global simulation instance shared by all routes
simulation = StringSimulation()

# -------------------------------------
# Models
# -------------------------------------
class PointRequest(BaseModel):
    index: int
    value: float = Field(allow_inf_nan=False)


class ModeRequest(BaseModel):
    mode: Mode


class CoefficientRequest(BaseModel):
    value: float = Field(allow_inf_nan=False)


class GeometryRequest(BaseModel):
    dx: float = Field(allow_inf_nan=False)
    dt: float = Field(allow_inf_nan=False)
    c: float = Field(allow_inf_nan=False)


# -------------------------------------
# Routes
# -------------------------------------
@app.get("/")
def root():
    return {"message": "String backend running"}


@app.post("/reset")
def reset():
    simulation.initialize()
    return {"status": "ok"}


@app.post("/clear")
def clear():
    simulation.clear()
    return {"status": "ok"}


@app.post("/step")
def step(steps: int = 1):
    simulation.step(steps)
    return {"status": "ok"}


@app.post("/point")
def point(body: PointRequest):
    result = simulation.set_point(body.index, body.value)
    return {"status": "ok", "applied": result.applied, "redraw": result.redraw}


@app.post("/mode")
def mode(body: ModeRequest):
    new_mode = simulation.set_mode(body.mode)
    return {"mode": new_mode.value, "status": new_mode.status}


@app.post("/damping")
def damping(body: CoefficientRequest):
    return {"damping": simulation.set_damping(body.value)}


@app.post("/fpu")
def fpu(body: CoefficientRequest):
    return {"fpu": simulation.set_fpu(body.value)}


@app.post("/geometry")
def geometry(body: GeometryRequest):
    try:
        courant = simulation.set_geometry(body.dx, body.dt, body.c)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"courant": courant, "stable": courant < 1.0}


@app.post("/start")
def start():
    simulation.start()
    return {"running": simulation.running}


@app.post("/stop")
def stop():
    simulation.stop()
    return {"running": simulation.running}


@app.get("/frame")
def frame():
    return simulation.frame()


@app.post("/step_and_frame")
def step_and_frame(steps: int = 1):
    simulation.step(steps)
    return simulation.frame()
