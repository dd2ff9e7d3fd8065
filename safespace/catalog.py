# safespace/catalog.py
"""Static content shipped with the app (no table behind it)."""
from typing import Dict, List

from safespace.schemas.content import StoryRow

TOPICS: List[Dict[str, str]] = [
    {"value": "anxiety", "label": "Anxiety", "emoji": "😰"},
    {"value": "loneliness", "label": "Loneliness", "emoji": "🌙"},
    {"value": "academics", "label": "Academics", "emoji": "📚"},
    {"value": "family", "label": "Family", "emoji": "🏠"},
    {"value": "relationships", "label": "Relationships", "emoji": "💕"},
    {"value": "self-esteem", "label": "Self-Esteem", "emoji": "🪞"},
    {"value": "general", "label": "General", "emoji": "💭"},
]
TOPIC_VALUES = [t["value"] for t in TOPICS]

MOODS: List[Dict[str, str]] = [
    {"emoji": "😊", "label": "Happy", "value": "happy"},
    {"emoji": "😌", "label": "Calm", "value": "calm"},
    {"emoji": "😐", "label": "Neutral", "value": "neutral"},
    {"emoji": "😔", "label": "Sad", "value": "sad"},
    {"emoji": "😰", "label": "Anxious", "value": "anxious"},
    {"emoji": "😤", "label": "Frustrated", "value": "frustrated"},
    {"emoji": "😴", "label": "Tired", "value": "tired"},
    {"emoji": "🥰", "label": "Loved", "value": "loved"},
]
MOOD_VALUES = [m["value"] for m in MOODS]

EMOTION_TAGS = [
    "hopeful", "overwhelmed", "grateful", "confused",
    "peaceful", "worried", "proud", "lonely",
    "excited", "frustrated", "content", "scared",
]

REFLECTION_PROMPTS = [
    "How are you feeling right now?",
    "What's weighing on your mind?",
    "What made you smile today?",
    "What are you grateful for?",
    "What would help you feel better?",
]

LEARN_CARDS = [
    {"title": "Understanding Emotions", "emoji": "🎭",
     "content": "Emotions are natural responses to life. They're not \"good\" or \"bad\" - they're information about what matters to you."},
    {"title": "Stress vs Anxiety", "emoji": "⚡",
     "content": "Stress is a response to a specific situation. Anxiety is worry about what might happen. Both are manageable with the right tools."},
    {"title": "Healthy Coping", "emoji": "🌱",
     "content": "Healthy coping helps you process feelings. Unhealthy coping (like avoidance) offers short-term relief but long-term problems."},
    {"title": "When to Seek Help", "emoji": "🤝",
     "content": "If feelings interfere with daily life for weeks, or you have thoughts of self-harm, reach out to a trusted adult or professional."},
    {"title": "Self-Compassion", "emoji": "💚",
     "content": "Treat yourself like you would a good friend. Mistakes are part of being human. Be gentle with yourself."},
    {"title": "Building Resilience", "emoji": "🏔️",
     "content": "Resilience isn't about not feeling pain. It's about having tools and support to navigate difficult times."},
]

BUILTIN_EXERCISES = [
    {
        "id": "breathing",
        "title": "Box Breathing",
        "description": "4-4-4-4 breathing technique to calm your nervous system",
        "category": "breathing",
        "icon": "🌬️",
        "steps": ["Breathe In", "Hold", "Breathe Out", "Hold"],
    },
    {
        "id": "grounding",
        "title": "5-4-3-2-1 Grounding",
        "description": "Use your senses to anchor yourself in the present",
        "category": "grounding",
        "icon": "🎯",
        "steps": [
            "Name 5 things you can see",
            "Name 4 things you can touch",
            "Name 3 things you can hear",
            "Name 2 things you can smell",
            "Name 1 thing you can taste",
        ],
    },
    {
        "id": "gratitude",
        "title": "Gratitude Pause",
        "description": "Take a moment to appreciate three good things",
        "category": "gratitude",
        "icon": "💚",
        "steps": ["Write down three things you are grateful for today"],
    },
]

# Template for stories created from the therapist dashboard
STORY_TEMPLATE = {
    "scenes": [
        {"id": "start", "text": "This is the beginning of your story. Edit this to add your narrative.",
         "choices": [{"text": "Continue", "nextSceneId": "end"}]},
        {"id": "end", "text": "Thank you for reading.",
         "reflection": "What did this story make you think about?", "isEnding": True},
    ]
}

_STORIES = [
    {"id": "1", "title": "The Weight of Expectations", "category": "Academic Pressure",
     "description": "Navigating parental expectations while finding your own path.",
     "content": {"scenes": [
         {"id": "start", "text": "Your parents expect straight A's. Your latest test came back with a B-. Your heart sinks as you walk home.",
          "choices": [{"text": "Hide the test", "nextSceneId": "hide"}, {"text": "Tell them honestly", "nextSceneId": "honest"}]},
         {"id": "hide", "text": "You stuff it in your bag. But the anxiety grows each day. What if they find out?",
          "choices": [{"text": "Keep hiding it", "nextSceneId": "anxiety"}, {"text": "Come clean", "nextSceneId": "relief"}]},
         {"id": "honest", "text": "Your mom looks disappointed but listens. \"What happened?\" she asks, genuinely curious.",
          "choices": [{"text": "Explain your struggles", "nextSceneId": "understood"}]},
         {"id": "anxiety", "text": "The secret weighs on you. You realize hiding creates more stress than the grade itself.",
          "reflection": "Hiding difficult truths often increases anxiety. Opening up, though scary, usually brings relief.", "isEnding": True},
         {"id": "relief", "text": "Coming clean feels like a weight lifted. Your parents are disappointed but appreciate your honesty.",
          "reflection": "Courage to be honest builds trust and reduces the burden of secrets.", "isEnding": True},
         {"id": "understood", "text": "\"I've been stressed,\" you admit. Your mom shares she felt similar pressure at your age. You feel less alone.",
          "reflection": "Opening up can reveal unexpected connections. Adults often understand more than we expect.", "isEnding": True},
     ]}},
    {"id": "2", "title": "The New School", "category": "Loneliness",
     "description": "Finding connection after moving to a new place.",
     "content": {"scenes": [
         {"id": "start", "text": "Week three at your new school. Lunch is the hardest - sitting alone while everyone else has their groups.",
          "choices": [{"text": "Put on headphones", "nextSceneId": "headphones"}, {"text": "Look for someone else alone", "nextSceneId": "reach"}]},
         {"id": "headphones", "text": "Music helps, but you notice another student glancing at you. They look just as lonely.",
          "choices": [{"text": "Keep to yourself", "nextSceneId": "alone"}, {"text": "Smile at them", "nextSceneId": "smile"}]},
         {"id": "reach", "text": "You spot someone reading alone. \"What are you reading?\" you ask nervously.",
          "choices": [{"text": "Wait for their response", "nextSceneId": "friend"}]},
         {"id": "alone", "text": "Days pass. The loneliness deepens. You realize walls keep pain out but also keep connection out.",
          "reflection": "Protection mechanisms like isolation can backfire. Small risks in reaching out often pay off.", "isEnding": True},
         {"id": "smile", "text": "They smile back and wave you over. \"Mind if I sit with you tomorrow?\"",
          "reflection": "A simple smile can open doors. Others often feel just as nervous about connecting.", "isEnding": True},
         {"id": "friend", "text": "Their eyes light up. Turns out you like the same author. You finally have someone to sit with.",
          "reflection": "Taking small social risks, like starting a conversation, can change everything.", "isEnding": True},
     ]}},
    {"id": "3", "title": "Speaking Up at Home", "category": "Family Dynamics",
     "description": "Expressing emotions in a household where feelings aren't discussed.",
     "content": {"scenes": [
         {"id": "start", "text": "Your family doesn't talk about feelings. \"We deal with problems, not emotions,\" your dad says. But you're struggling.",
          "choices": [{"text": "Keep it inside", "nextSceneId": "inside"}, {"text": "Write a letter", "nextSceneId": "letter"}]},
         {"id": "inside", "text": "The pressure builds. You snap at your sibling. Everyone asks what's wrong with you.",
          "choices": [{"text": "Storm off", "nextSceneId": "storm"}, {"text": "Use this moment", "nextSceneId": "moment"}]},
         {"id": "letter", "text": "You write everything down and leave it for your mom. The next day, she knocks on your door quietly.",
          "choices": [{"text": "Open the door", "nextSceneId": "open"}]},
         {"id": "storm", "text": "Alone in your room, you cry. The emotions needed somewhere to go. Maybe next time you can find a better outlet.",
          "reflection": "Suppressed emotions often come out sideways. Finding healthy outlets is essential.", "isEnding": True},
         {"id": "moment", "text": "\"I'm not okay,\" you say quietly. The room goes silent. Then your mom sits beside you.",
          "reflection": "Crisis moments can become opportunities for breakthrough if we stay present.", "isEnding": True},
         {"id": "open", "text": "\"I didn't know you felt this way,\" she says softly. It's the beginning of a new kind of conversation.",
          "reflection": "Writing can be a bridge when speaking feels impossible. New patterns can start small.", "isEnding": True},
     ]}},
    {"id": "4", "title": "The Perfect Feed", "category": "Social Media & Self-Image",
     "description": "When comparison steals your joy.",
     "content": {"scenes": [
         {"id": "start", "text": "You scroll through perfect photos - perfect bodies, perfect lives. You feel small and inadequate.",
          "choices": [{"text": "Keep scrolling", "nextSceneId": "scroll"}, {"text": "Put the phone down", "nextSceneId": "put"}]},
         {"id": "scroll", "text": "Hours pass. You feel worse. You post a filtered photo of yourself, seeking validation.",
          "choices": [{"text": "Wait for likes", "nextSceneId": "wait"}, {"text": "Delete it", "nextSceneId": "delete"}]},
         {"id": "put", "text": "You go for a walk instead. The real world feels different - less polished but more real.",
          "choices": [{"text": "Keep walking", "nextSceneId": "walk"}]},
         {"id": "wait", "text": "The likes trickle in. It feels good for a moment, then empty. You realize you're chasing something that can't satisfy.",
          "reflection": "External validation is like junk food - temporarily satisfying but never nourishing.", "isEnding": True},
         {"id": "delete", "text": "Deleting feels freeing. You don't need to perform for anyone. Your worth isn't measured in likes.",
          "reflection": "Opting out of comparison culture is an act of self-compassion.", "isEnding": True},
         {"id": "walk", "text": "You notice flowers, feel the breeze. Real experiences beat curated ones. Your mood lifts.",
          "reflection": "Presence in the real world often heals what digital consumption wounds.", "isEnding": True},
     ]}},
    {"id": "5", "title": "Asking for Help", "category": "Mental Health Stigma",
     "description": "When you realize you can't do it alone.",
     "content": {"scenes": [
         {"id": "start", "text": "The dark thoughts have lasted weeks now. You know something's wrong, but asking for help feels like failure.",
          "choices": [{"text": "Try to push through", "nextSceneId": "push"}, {"text": "Tell someone", "nextSceneId": "tell"}]},
         {"id": "push", "text": "Another week passes. The weight gets heavier. You realize strength isn't about handling everything alone.",
          "choices": [{"text": "Keep trying alone", "nextSceneId": "alone"}, {"text": "Reach out", "nextSceneId": "reach"}]},
         {"id": "tell", "text": "You tell the school counselor. \"Thank you for trusting me,\" they say. \"That took courage.\"",
          "choices": [{"text": "Accept their help", "nextSceneId": "accept"}]},
         {"id": "alone", "text": "Isolation deepens the struggle. You finally realize: asking for help isn't weakness, suffering alone is just harder.",
          "reflection": "True strength includes knowing when to reach out. No one is meant to struggle alone.", "isEnding": True},
         {"id": "reach", "text": "You text a trusted adult: \"I need help.\" Their response is immediate and caring. Relief washes over you.",
          "reflection": "Reaching out is the first step toward healing. Help is often closer than we think.", "isEnding": True},
         {"id": "accept", "text": "You start meeting weekly. For the first time in months, you feel hope. You're not broken - you're healing.",
          "reflection": "Professional support isn't a sign of failure. It's a pathway to growth and recovery.", "isEnding": True},
     ]}},
]

BUILTIN_STORIES: List[StoryRow] = [StoryRow.model_validate(s) for s in _STORIES]
