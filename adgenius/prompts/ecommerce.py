"""E-commerce mode pose templates, in selection order"""

ECOMMERCE_BLOCK_TEMPLATE = """
POSE: {pose}
BACKGROUND: Clean, distraction-free, consistent with **{style}**.
LIGHTING: Softbox studio lighting to show product details clearly. Soft shadows."""

ECOMMERCE_POSES = [
    {
        "label": "Front View",
        "pose": "Full front view. Model looking at camera. Symmetrical. Neutral standing pose."
    },
    {
        "label": "Back View",
        "pose": "Back view of the model. Show back details and cut. Neutral standing pose."
    },
    {
        "label": "Side Profile",
        "pose": "Side profile view of the model. Show silhouette and side details."
    },
    {
        "label": "Fabric & Texture Detail",
        "pose": "Close-up macro shot of the fabric. Focus on texture. (Model may be cropped)"
    },
    {
        "label": "Lifestyle Moment",
        "pose": "Model in slight motion, walking or turning. Natural drape of the fabric."
    },
    {
        "label": "Full Body",
        "pose": "Full body shot of the model showing the entire look + shoes. Professional pose."
    },
    {
        "label": "Three-Quarter View",
        "pose": "Three-quarter angle from the front. Weight on one leg, relaxed shoulders."
    },
    {
        "label": "Artistic Editorial",
        "pose": "Artistic editorial pose with strong lines, still fully showing the product."
    },
    {
        "label": "Seated Pose",
        "pose": "Model seated on a simple stool, posture upright, product fully visible."
    },
    {
        "label": "Detail Close-up",
        "pose": "Close-up of construction details: collar, buttons, seams or hardware."
    },
    {
        "label": "Walking Motion",
        "pose": "Model walking toward camera, mid-stride, fabric in natural motion."
    },
    {
        "label": "Styled Accessory Shot",
        "pose": "Half-body shot with hands interacting with the product (adjusting a sleeve or hem)."
    }
]
