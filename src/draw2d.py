"""OpenGL viewer for the 2D soft body."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

from OpenGL.GL import (
    glBegin,
    glClear,
    glClearColor,
    glColor3f,
    glEnd,
    glLineWidth,
    glLoadIdentity,
    glMatrixMode,
    glOrtho,
    glPointSize,
    glVertex3f,
    glViewport,
    GL_COLOR_BUFFER_BIT,
    GL_LINES,
    GL_MODELVIEW,
    GL_POINTS,
    GL_PROJECTION,
)
from OpenGL.GLUT import (
    GLUT_ACTIVE_SHIFT,
    GLUT_DOUBLE,
    GLUT_ELAPSED_TIME,
    GLUT_LEFT_BUTTON,
    GLUT_RGB,
    GLUT_RIGHT_BUTTON,
    GLUT_UP,
    glutCreateWindow,
    glutDisplayFunc,
    glutGet,
    glutGetModifiers,
    glutIdleFunc,
    glutInit,
    glutInitDisplayMode,
    glutInitWindowPosition,
    glutInitWindowSize,
    glutKeyboardFunc,
    glutMainLoop,
    glutMouseFunc,
    glutPostRedisplay,
    glutReshapeFunc,
    glutSwapBuffers,
)

from softbody2d import SoftBody2D

logger = logging.getLogger(__name__)


@dataclass
class Draw2D:
    softbody: SoftBody2D
    window_size: Tuple[int, int] = (800, 800)
    view_extent: float = 1.0

    # -- OpenGL setup -----------------------------------------------------
    def run(self) -> None:
        glutInit()
        glutInitDisplayMode(GLUT_DOUBLE | GLUT_RGB)
        glutInitWindowSize(*self.window_size)
        glutInitWindowPosition(100, 100)
        glutCreateWindow(b"Mass Spring Softbody (2D)")

        glClearColor(0.0, 0.0, 0.0, 1.0)
        logger.info("Viewer opened at %dx%d", *self.window_size)

        glutDisplayFunc(self.display)
        glutIdleFunc(self.idle)
        glutReshapeFunc(self.reshape)
        glutMouseFunc(self.mouse_button)
        glutKeyboardFunc(self.keyboard)

        self.softbody.reset(self._elapsed_seconds())
        glutMainLoop()

    @staticmethod
    def _elapsed_seconds() -> float:
        return glutGet(GLUT_ELAPSED_TIME) / 1000.0

    # -- Input ------------------------------------------------------------
    def mouse_button(self, button: int, state: int, x: int, y: int) -> None:
        # Scroll wheel arrives as buttons 3 and 4.
        if button not in (GLUT_LEFT_BUTTON, GLUT_RIGHT_BUTTON):
            return

        pressed = state != GLUT_UP
        shift_held = pressed and bool(glutGetModifiers() & GLUT_ACTIVE_SHIFT)
        self.softbody.force_input.button_event(
            positive_button=button == GLUT_LEFT_BUTTON,
            pressed=pressed,
            alternate_axis=shift_held,
        )

    def keyboard(self, key: bytes, x: int, y: int) -> None:
        if key in (b"r", b"R"):
            self.softbody.reset(self._elapsed_seconds())
            glutPostRedisplay()

    # -- GLUT callbacks ---------------------------------------------------
    def reshape(self, width: int, height: int) -> None:
        if height == 0:
            height = 1
        glViewport(0, 0, width, height)
        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        aspect = width / float(height)
        extent = self.view_extent
        glOrtho(-extent * aspect, extent * aspect, -extent, extent, -1.0, 1.0)
        glMatrixMode(GL_MODELVIEW)

    def idle(self) -> None:
        self.softbody.step(self._elapsed_seconds())
        glutPostRedisplay()

    def display(self) -> None:
        glClear(GL_COLOR_BUFFER_BIT)
        glLoadIdentity()

        positions = self.softbody.positions()
        self._draw_links(positions)
        self._draw_nodes(positions)

        glutSwapBuffers()

    def _draw_links(self, positions) -> None:
        glLineWidth(1.0)
        glColor3f(0.0, 1.0, 1.0)
        glBegin(GL_LINES)
        for (i0, j0), (i1, j1) in self.softbody.grid.links():
            glVertex3f(*positions[i0, j0])
            glVertex3f(*positions[i1, j1])
        glEnd()

    def _draw_nodes(self, positions) -> None:
        glPointSize(4.0)
        glBegin(GL_POINTS)
        anchor_row = self.softbody.grid.anchor_row
        for i, row in enumerate(positions):
            if i == anchor_row:
                glColor3f(1.0, 0.6, 0.1)
            else:
                glColor3f(0.2, 0.6, 1.0)
            for position in row:
                glVertex3f(*position)
        glEnd()
