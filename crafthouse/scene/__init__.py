from .demo import SceneObject, PointLight, DemoScene, demo_scene

__all__ = ['SceneObject', 'PointLight', 'DemoScene', 'demo_scene']
